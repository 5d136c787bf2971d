"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from macro_monitor.adapters.fdc_client import HttpxFdcClient
from macro_monitor.adapters.in_memory_repositories import (
    InMemoryCustomFoodRepository,
    InMemoryDayRepository,
)
from macro_monitor.adapters.openai_text_client import OpenAITextClient
from macro_monitor.config import Settings
from macro_monitor.services.cache import InMemoryCache
from macro_monitor.services.custom_foods import CustomFoodService
from macro_monitor.services.days import DayLogService
from macro_monitor.services.nutrition import NutritionService
from macro_monitor.services.parsing import ParseService
from macro_monitor.services.resolver import ItemResolver


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    parse_service: ParseService
    nutrition_service: NutritionService
    custom_food_service: CustomFoodService
    resolver: ItemResolver
    day_log_service: DayLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The OpenAI client is created on first use, so the app boots without
    credentials and logging a meal then fails fast with a configuration error.
    """
    resolved_settings = settings or Settings()
    text_client = OpenAITextClient.create(resolved_settings.openai_api_key or "")
    parse_service = ParseService(
        client=text_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key or "",
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        page_size=resolved_settings.fdc_page_size,
        search_ttl_seconds=resolved_settings.search_ttl_seconds,
        food_ttl_seconds=resolved_settings.food_ttl_seconds,
        debug=resolved_settings.debug,
    )
    custom_food_service = CustomFoodService(InMemoryCustomFoodRepository())
    resolver = ItemResolver(
        nutrition_service=nutrition_service,
        custom_food_service=custom_food_service,
        concurrency=resolved_settings.resolve_concurrency,
    )
    day_log_service = DayLogService(
        parse_service=parse_service,
        resolver=resolver,
        repository=InMemoryDayRepository(),
        thresholds=resolved_settings.advisory_thresholds(),
        preflight=resolved_settings.require_credentials,
    )

    async def close_resources() -> None:
        await text_client.close()
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        parse_service=parse_service,
        nutrition_service=nutrition_service,
        custom_food_service=custom_food_service,
        resolver=resolver,
        day_log_service=day_log_service,
        close_resources=close_resources,
    )
