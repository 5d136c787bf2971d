"""Process-local repositories for day records and custom foods."""

from dataclasses import dataclass, field
from datetime import date

from macro_monitor.domain.days import DayRecord
from macro_monitor.domain.nutrition import CustomFood
from macro_monitor.services.custom_foods import CustomFoodRepository
from macro_monitor.services.days import DayRepository


@dataclass
class InMemoryDayRepository(DayRepository):
    """Day records keyed by date."""

    days: dict[date, DayRecord] = field(default_factory=dict)

    def get_day(self, day: date) -> DayRecord | None:
        return self.days.get(day)

    def save_day(self, record: DayRecord) -> None:
        if record.items:
            self.days[record.day] = record
        else:
            self.days.pop(record.day, None)


@dataclass
class InMemoryCustomFoodRepository(CustomFoodRepository):
    """Custom foods keyed by lowercased name, in insertion order."""

    foods: dict[str, CustomFood] = field(default_factory=dict)

    def list_foods(self) -> list[CustomFood]:
        return list(self.foods.values())

    def save_food(self, food: CustomFood) -> CustomFood:
        self.foods[food.name.lower()] = food
        return food
