"""Nutrition lookup service integrating USDA FDC."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from macro_monitor.adapters.fdc_client import FdcClient
from macro_monitor.domain.errors import UpstreamError
from macro_monitor.domain.nutrition import FoodCandidate, FoodDetail
from macro_monitor.services.cache import Cache
from macro_monitor.services.nutrients import parse_candidates, parse_food_detail

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Search and detail lookups with memoization keyed on the search phrase."""

    fdc_client: FdcClient
    cache: Cache
    page_size: int = 10
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    debug: bool = False

    async def search(self, query: str) -> list[FoodCandidate]:
        """Search FDC foods with caching."""
        normalized = " ".join(query.lower().split())
        cache_key = f"fdc:search:{normalized}:{self.page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call(
            lambda: self.fdc_client.search_foods(normalized, page_size=self.page_size),
            action="search",
        )
        if not isinstance(payload, dict):
            raise UpstreamError(
                "FoodData Central search returned an unexpected payload"
            )
        candidates = parse_candidates(payload)
        self.cache.set(cache_key, candidates, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info(
                "Nutrition search FDC: query=%s results=%s", normalized, len(candidates)
            )
        return candidates

    async def get_food(self, fdc_id: int) -> FoodDetail:
        """Retrieve a food detail record normalized to per-100g values."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodDetail):
            return cached

        payload = await self._call(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        if not isinstance(payload, dict):
            raise UpstreamError(
                f"FoodData Central food {fdc_id} returned an unexpected payload"
            )
        details = parse_food_detail(payload, fdc_id)
        self.cache.set(cache_key, details, ttl_seconds=self.food_ttl_seconds)
        if self.debug:
            _logger.info("Nutrition food FDC: fdc_id=%s", fdc_id)
        return details

    async def _call(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the lookup client once, translating failures into ``UpstreamError``."""
        try:
            return await func()
        except (httpx.HTTPError, ValueError) as exc:
            status_code = _status_code_from_exception(exc)
            _logger.warning(
                "Nutrition %s failed (status=%s): %s", action, status_code, exc
            )
            raise UpstreamError(
                f"FoodData Central {action} failed (status={status_code})"
            ) from exc


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
