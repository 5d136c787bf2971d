"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from macro_monitor.api.models import CustomFoodRequest, ParseRequest
from macro_monitor.app_logging import configure_logging
from macro_monitor.containers import AppContainer
from macro_monitor.domain.days import DaySummary
from macro_monitor.domain.errors import ConfigurationError, UpstreamError
from macro_monitor.domain.nutrition import (
    NUTRIENT_FIELDS,
    CustomFood,
    NutrientProfile,
    ResolvedItem,
)
from macro_monitor.services.aggregation import net_carbs
from macro_monitor.services.nutrients import round_half_up


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ConfigurationError)
    async def configuration_error(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error("Configuration error: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.error("Upstream error: %s", exc)
        return JSONResponse(status_code=502, content={"error": str(exc)})

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/parse")
    async def parse(payload: ParseRequest, request: Request) -> dict[str, object]:
        """Parse free text, resolve every item and log them for the date."""
        text = payload.text.strip()
        if not text:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing 'text' in request body",
            )
        state_container: AppContainer = request.app.state.container
        summary = await state_container.day_log_service.log_text(
            payload.date or _today(), text
        )
        return _format_day(summary)

    @app.get("/api/days/{day}")
    async def get_day(day: date, request: Request) -> dict[str, object]:
        """Return a day's items, totals and advisories."""
        state_container: AppContainer = request.app.state.container
        return _format_day(state_container.day_log_service.get_day(day))

    @app.delete("/api/days/{day}/items/{item_id}")
    async def delete_item(
        day: date, item_id: str, request: Request
    ) -> dict[str, object]:
        """Remove a logged item."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.day_log_service.remove_item(day, item_id)
        if summary is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _format_day(summary)

    @app.get("/api/days/{day}/week")
    async def get_week(day: date, request: Request) -> dict[str, object]:
        """Return the Monday-start week containing the day."""
        state_container: AppContainer = request.app.state.container
        week = state_container.day_log_service.get_week(day)
        return {"days": [_format_week_day(summary) for summary in week]}

    @app.get("/api/custom-foods")
    async def list_custom_foods(request: Request) -> dict[str, object]:
        """Return custom foods."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.custom_food_service.list_foods()
        return {"foods": [_format_custom_food(food) for food in foods]}

    @app.post("/api/custom-foods")
    async def add_custom_food(
        payload: CustomFoodRequest, request: Request
    ) -> dict[str, object]:
        """Create or replace a custom food."""
        state_container: AppContainer = request.app.state.container
        nutrients = NutrientProfile(
            **{name: getattr(payload, name) for name in NUTRIENT_FIELDS}
        )
        try:
            food = state_container.custom_food_service.add(
                CustomFood(name=payload.name, nutrients=nutrients)
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return _format_custom_food(food)

    return app


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _format_item(item: ResolvedItem) -> dict[str, object]:
    return {
        "id": item.id,
        "name": item.name,
        "source": item.source.value,
        "grams": item.grams,
        "notes": item.notes,
        **item.nutrients.as_dict(),
        "netCarbs": round_half_up(net_carbs(item.nutrients), 1),
    }


def _format_day(summary: DaySummary) -> dict[str, object]:
    return {
        "date": summary.day.isoformat(),
        "items": [_format_item(item) for item in summary.items],
        "totals": summary.totals.nutrients.as_dict(),
        "netCarbs": summary.net_carbs,
        "warnings": [advisory.message for advisory in summary.advisories],
    }


def _format_week_day(summary: DaySummary) -> dict[str, object]:
    return {
        "date": summary.day.isoformat(),
        "has": bool(summary.items),
        **summary.totals.nutrients.as_dict(),
        "netCarbs": summary.net_carbs,
    }


def _format_custom_food(food: CustomFood) -> dict[str, object]:
    return {"name": food.name, **food.nutrients.as_dict()}
