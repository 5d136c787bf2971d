"""Resolution of parsed items into quantified nutrient records."""

import asyncio
import logging
from dataclasses import dataclass

from macro_monitor.domain.nutrition import (
    ZERO_PROFILE,
    FoodDetail,
    ResolvedItem,
    SourceTag,
)
from macro_monitor.domain.parsing import ParsedItem
from macro_monitor.domain.units import grams_per_unit
from macro_monitor.services.candidates import pick_best
from macro_monitor.services.custom_foods import CustomFoodService
from macro_monitor.services.estimation import estimate_grams
from macro_monitor.services.nutrients import round_profile, scale_raw
from macro_monitor.services.nutrition import NutritionService
from macro_monitor.services.units import to_grams

_logger = logging.getLogger(__name__)


@dataclass
class ItemResolver:
    """Resolves each parsed item independently.

    Custom foods short-circuit the external lookup. Otherwise the best search
    candidate is fetched and scaled to the determined mass. An empty search is
    a zero-valued ``unmatched`` item, while lookup failures propagate and abort
    the whole batch.
    """

    nutrition_service: NutritionService
    custom_food_service: CustomFoodService | None = None
    concurrency: int = 4

    async def resolve(self, item: ParsedItem) -> ResolvedItem:
        """Resolve a single parsed item."""
        if self.custom_food_service is not None:
            custom = self.custom_food_service.find_match(item)
            if custom is not None:
                raw = custom.nutrients.multiply(item.count)
                return ResolvedItem(
                    name=item.name,
                    nutrients=round_profile(raw),
                    raw_nutrients=raw,
                    source=SourceTag.CUSTOM,
                    notes=item.notes,
                )

        candidates = await self.nutrition_service.search(item.query)
        best = pick_best(candidates)
        if best is None:
            _logger.info("No food candidates for query=%s", item.query)
            return _unmatched(item)

        detail = await self.nutrition_service.get_food(best.fdc_id)
        if not detail.has_nutrient_data:
            _logger.info("Food %s has no tracked nutrients", best.fdc_id)
            return _unmatched(item)

        grams = determine_grams(item, detail)
        raw = scale_raw(detail.per_100g, grams)
        return ResolvedItem(
            name=item.name,
            nutrients=round_profile(raw),
            raw_nutrients=raw,
            source=SourceTag.MATCHED,
            grams=grams,
            notes=item.notes,
        )

    async def resolve_batch(self, items: list[ParsedItem]) -> list[ResolvedItem]:
        """Resolve items with bounded parallelism, preserving input order."""
        semaphore = asyncio.Semaphore(max(self.concurrency, 1))

        async def _bounded(item: ParsedItem) -> ResolvedItem:
            async with semaphore:
                return await self.resolve(item)

        tasks = [asyncio.ensure_future(_bounded(item)) for item in items]
        try:
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            raise


def determine_grams(item: ParsedItem, detail: FoodDetail) -> float:
    """Pick the consumed mass in grams.

    Order: explicit grams, unit conversion, the record's serving size when it
    is stated in a mass unit (times the quantity), then lexical estimation.
    """
    if item.explicit_grams:
        return item.explicit_grams
    if item.unit:
        grams = to_grams(item.count, item.unit)
        if grams > 0:
            return grams
    if detail.serving_size and detail.serving_size > 0:
        per_unit = grams_per_unit(detail.serving_size_unit)
        if per_unit > 0:
            return detail.serving_size * per_unit * item.count
    return estimate_grams(item)


def _unmatched(item: ParsedItem) -> ResolvedItem:
    return ResolvedItem(
        name=item.name,
        nutrients=ZERO_PROFILE,
        source=SourceTag.UNMATCHED,
        notes=item.notes,
    )
