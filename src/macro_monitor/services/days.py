"""Day log service: parse, resolve, store and summarize."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from macro_monitor.domain.days import DayRecord, DaySummary
from macro_monitor.services.aggregation import (
    AdvisoryThresholds,
    advise,
    aggregate,
    net_carbs,
)
from macro_monitor.services.nutrients import round_half_up
from macro_monitor.services.parsing import ParseService
from macro_monitor.services.resolver import ItemResolver

_logger = logging.getLogger(__name__)


class DayRepository(Protocol):
    """Persistence interface for day records."""

    def get_day(self, day: date) -> DayRecord | None:
        """Return the record for ``day``, if any."""

    def save_day(self, record: DayRecord) -> None:
        """Store a day record, replacing any previous one."""


@dataclass
class DayLogService:
    """Logs free-text meals against a date and evaluates the day."""

    parse_service: ParseService
    resolver: ItemResolver
    repository: DayRepository
    thresholds: AdvisoryThresholds
    preflight: Callable[[], None] | None = None

    async def log_text(self, day: date, text: str) -> DaySummary:
        """Parse and resolve ``text``, appending all items to ``day`` at once.

        Missing credentials or any upstream failure abort before anything is stored.
        """
        if self.preflight is not None:
            self.preflight()
        parsed = await self.parse_service.parse(text)
        resolved = await self.resolver.resolve_batch(parsed)
        record = self._load(day).append(resolved)
        self.repository.save_day(record)
        _logger.info("Logged %s items for %s", len(resolved), day.isoformat())
        return self.summarize(record)

    def remove_item(self, day: date, item_id: str) -> DaySummary | None:
        """Remove an item by id; returns ``None`` when it does not exist."""
        record = self.repository.get_day(day)
        if record is None or all(item.id != item_id for item in record.items):
            return None
        updated = record.remove(item_id)
        self.repository.save_day(updated)
        return self.summarize(updated)

    def get_day(self, day: date) -> DaySummary:
        """Return the summary for ``day``."""
        return self.summarize(self._load(day))

    def get_week(self, day: date) -> list[DaySummary]:
        """Return summaries for the Monday-start week containing ``day``."""
        monday = day - timedelta(days=day.weekday())
        return [self.get_day(monday + timedelta(days=offset)) for offset in range(7)]

    def summarize(self, record: DayRecord) -> DaySummary:
        """Compute totals and advisories for a record."""
        totals = aggregate(record.items)
        return DaySummary(
            day=record.day,
            items=record.items,
            totals=totals,
            net_carbs=round_half_up(net_carbs(totals.nutrients), 1),
            advisories=tuple(advise(totals, self.thresholds)),
        )

    def _load(self, day: date) -> DayRecord:
        return self.repository.get_day(day) or DayRecord(day=day)
