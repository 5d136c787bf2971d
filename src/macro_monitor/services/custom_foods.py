"""Services for user-defined custom foods."""

from dataclasses import dataclass
from typing import Protocol

from macro_monitor.domain.nutrition import CustomFood
from macro_monitor.domain.parsing import ParsedItem


class CustomFoodRepository(Protocol):
    """Persistence interface for custom foods."""

    def list_foods(self) -> list[CustomFood]:
        """Return custom foods in insertion order."""

    def save_food(self, food: CustomFood) -> CustomFood:
        """Create or replace a custom food by name."""


@dataclass
class CustomFoodService:
    """Application service for custom food lookups."""

    repository: CustomFoodRepository

    def add(self, food: CustomFood) -> CustomFood:
        """Store a custom food."""
        name = food.name.strip()
        if not name:
            raise ValueError("Custom food name must not be empty")
        return self.repository.save_food(
            CustomFood(name=name, nutrients=food.nutrients)
        )

    def list_foods(self) -> list[CustomFood]:
        """Return all custom foods."""
        return self.repository.list_foods()

    def find_match(self, item: ParsedItem) -> CustomFood | None:
        """Return the first custom food whose name overlaps the item text."""
        texts = [text.lower() for text in (item.name, item.query) if text]
        for food in self.repository.list_foods():
            food_name = food.name.strip().lower()
            if not food_name:
                continue
            for text in texts:
                if food_name in text or text in food_name:
                    return food
        return None
