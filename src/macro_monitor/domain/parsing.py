"""Models for items extracted from free-text food descriptions."""

import math

from pydantic import BaseModel, Field, field_validator, model_validator

from macro_monitor.domain.units import grams_per_unit

MAX_TEXT_LENGTH = 120
MAX_COUNT = 50.0
MAX_GRAMS = 2000.0


def _finite_positive(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


class ParsedItem(BaseModel):
    """Single food item as understood from user text.

    Missing or non-finite numbers become ``None``; present numbers are clamped
    so a single item never represents more than 2000 g or a count above 50.
    """

    name: str = ""
    query: str = Field(min_length=1, max_length=MAX_TEXT_LENGTH)
    quantity: float | None = None
    unit: str | None = None
    explicit_grams: float | None = None
    notes: str | None = None

    @field_validator("name", "query", mode="before")
    @classmethod
    def clean_text(cls, value: object) -> str:
        return str(value or "").strip()[:MAX_TEXT_LENGTH]

    @field_validator("unit", "notes", mode="before")
    @classmethod
    def clean_optional_text(cls, value: object) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()[:MAX_TEXT_LENGTH]
        return cleaned or None

    @field_validator("quantity", "explicit_grams", mode="before")
    @classmethod
    def clean_number(cls, value: object) -> float | None:
        return _finite_positive(value)

    @model_validator(mode="after")
    def clamp_numbers(self) -> "ParsedItem":
        if not self.name:
            self.name = self.query
        if self.quantity is not None:
            factor = grams_per_unit(self.unit)
            limit = MAX_GRAMS / factor if factor else MAX_COUNT
            self.quantity = min(self.quantity, limit)
        if self.explicit_grams is not None:
            self.explicit_grams = min(self.explicit_grams, MAX_GRAMS)
        return self

    @property
    def text(self) -> str:
        """Lowercased unit, name and query text used by lexical heuristics."""
        parts = [self.unit or "", self.name, self.query]
        return " ".join(part for part in parts if part).lower()

    @property
    def count(self) -> float:
        """Quantity used as a multiplier, defaulting to 1."""
        return self.quantity if self.quantity is not None else 1.0


class ParseExtract(BaseModel):
    """Structured output for text extraction."""

    items: list[ParsedItem]
