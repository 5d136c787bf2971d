"""Domain models for daily logs."""

from dataclasses import dataclass, field
from datetime import date

from macro_monitor.domain.nutrition import NutrientProfile, ResolvedItem


@dataclass(frozen=True)
class DayRecord:
    """Ordered items logged for a calendar date."""

    day: date
    items: tuple[ResolvedItem, ...] = ()

    def append(self, items: list[ResolvedItem]) -> "DayRecord":
        """Return a record with ``items`` appended."""
        return DayRecord(day=self.day, items=(*self.items, *items))

    def remove(self, item_id: str) -> "DayRecord":
        """Return a record without the item with ``item_id``."""
        return DayRecord(
            day=self.day, items=tuple(item for item in self.items if item.id != item_id)
        )


@dataclass(frozen=True)
class DailyTotals:
    """Totals derived from a day's items; never persisted."""

    nutrients: NutrientProfile = field(default_factory=NutrientProfile)
    item_count: int = 0


@dataclass(frozen=True)
class Advisory:
    """Threshold warning for a day's totals."""

    kind: str
    message: str
    amount: float


@dataclass(frozen=True)
class DaySummary:
    """A day's items with totals and advisories."""

    day: date
    items: tuple[ResolvedItem, ...]
    totals: DailyTotals
    net_carbs: float
    advisories: tuple[Advisory, ...]
