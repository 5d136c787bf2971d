"""Nutrition domain models."""

from dataclasses import dataclass, field, fields
from enum import StrEnum
from uuid import uuid4

NUTRIENT_FIELDS = (
    "calories",
    "protein",
    "fat",
    "carbs",
    "fiber",
    "sodium",
    "potassium",
    "magnesium",
)


@dataclass(frozen=True)
class NutrientProfile:
    """The eight tracked nutrients.

    Energy is in kcal, sodium/potassium/magnesium in mg and the rest in grams.
    Used both for per-100g values and for values scaled to a consumed mass.
    """

    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0
    magnesium: float = 0.0

    def as_dict(self) -> dict[str, float]:
        """Return the profile as a plain mapping."""
        return {item.name: getattr(self, item.name) for item in fields(self)}

    def multiply(self, factor: float) -> "NutrientProfile":
        """Return every field multiplied by ``factor``."""
        return NutrientProfile(
            **{name: value * factor for name, value in self.as_dict().items()}
        )

    def plus(self, other: "NutrientProfile") -> "NutrientProfile":
        """Return the field-wise sum of two profiles."""
        return NutrientProfile(
            **{
                name: value + getattr(other, name)
                for name, value in self.as_dict().items()
            }
        )


ZERO_PROFILE = NutrientProfile()


class SourceTag(StrEnum):
    """Where a resolved item's nutrients came from."""

    MATCHED = "matched"
    CUSTOM = "custom"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class FoodCandidate:
    """Summary of a food search hit, used only for scoring."""

    fdc_id: int
    description: str
    data_type: str
    has_nutrient_data: bool


@dataclass(frozen=True)
class FoodDetail:
    """Food detail record normalized to a per-100g profile."""

    fdc_id: int
    description: str
    per_100g: NutrientProfile
    has_nutrient_data: bool
    serving_size: float | None = None
    serving_size_unit: str | None = None


@dataclass(frozen=True)
class ResolvedItem:
    """A logged food entry with its final, mass-scaled profile.

    ``raw_nutrients`` keeps the unrounded scaled values so totals can be
    summed before rounding.
    """

    name: str
    nutrients: NutrientProfile
    source: SourceTag
    grams: float | None = None
    raw_nutrients: NutrientProfile | None = None
    notes: str | None = None
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def exact_nutrients(self) -> NutrientProfile:
        """Unrounded nutrients when known, the rounded ones otherwise."""
        return self.raw_nutrients or self.nutrients


@dataclass(frozen=True)
class CustomFood:
    """User-defined food whose profile is per single unit of quantity."""

    name: str
    nutrients: NutrientProfile
