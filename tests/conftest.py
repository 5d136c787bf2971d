"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import httpx
import pytest

from macro_monitor.adapters.fdc_client import FdcClient
from macro_monitor.adapters.in_memory_repositories import (
    InMemoryCustomFoodRepository,
    InMemoryDayRepository,
)
from macro_monitor.config import Settings
from macro_monitor.containers import AppContainer
from macro_monitor.services.cache import InMemoryCache
from macro_monitor.services.custom_foods import CustomFoodService
from macro_monitor.services.days import DayLogService
from macro_monitor.services.nutrition import NutritionService
from macro_monitor.services.parsing import ParseService, TextClient
from macro_monitor.services.resolver import ItemResolver

EGG_ID = 748967
SPINACH_ID = 1999633
BUTTER_ID = 173410


def fdc_nutrients(**amounts: float) -> list[dict[str, object]]:
    """Build FDC detail nutrient entries keyed by tracked field name."""
    ids = {
        "calories": (1008, "208", "kcal"),
        "protein": (1003, "203", "g"),
        "fat": (1004, "204", "g"),
        "carbs": (1005, "205", "g"),
        "fiber": (1079, "291", "g"),
        "sodium": (1093, "307", "mg"),
        "potassium": (1092, "306", "mg"),
        "magnesium": (1090, "304", "mg"),
    }
    entries: list[dict[str, object]] = []
    for name, amount in amounts.items():
        nutrient_id, number, unit = ids[name]
        entries.append(
            {
                "nutrient": {"id": nutrient_id, "number": number, "unitName": unit},
                "amount": amount,
            }
        )
    return entries


def egg_detail() -> dict[str, object]:
    return {
        "fdcId": EGG_ID,
        "description": "Eggs, Grade A, Large, egg whole",
        "dataType": "Foundation",
        "foodNutrients": fdc_nutrients(
            calories=155,
            protein=13,
            fat=11,
            carbs=1.1,
            fiber=0,
            sodium=124,
            potassium=126,
            magnesium=12,
        ),
    }


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with per-query search results and per-id details."""

    searches: dict[str, list[dict[str, object]]] = field(
        default_factory=lambda: {
            "egg": [
                {"fdcId": 111, "dataType": "Branded", "foodNutrients": [{}]},
                {"fdcId": EGG_ID, "dataType": "Foundation", "foodNutrients": [{}]},
            ],
            "spinach": [
                {"fdcId": SPINACH_ID, "dataType": "Foundation", "foodNutrients": [{}]}
            ],
            "butter": [
                {"fdcId": BUTTER_ID, "dataType": "SR Legacy", "foodNutrients": [{}]}
            ],
        }
    )
    details: dict[int, dict[str, object]] = field(
        default_factory=lambda: {
            EGG_ID: egg_detail(),
            SPINACH_ID: {
                "fdcId": SPINACH_ID,
                "description": "Spinach, mature",
                "foodNutrients": fdc_nutrients(
                    calories=23,
                    protein=2.9,
                    fat=0.4,
                    carbs=3.6,
                    fiber=2.2,
                    sodium=79,
                    potassium=558,
                    magnesium=79,
                ),
            },
            BUTTER_ID: {
                "fdcId": BUTTER_ID,
                "description": "Butter, salted",
                "foodNutrients": fdc_nutrients(
                    calories=717, protein=0.9, fat=81, carbs=0.1, sodium=643
                ),
            },
        }
    )
    search_calls: list[str] = field(default_factory=list)
    food_calls: list[int] = field(default_factory=list)
    fail_search: bool = False

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        self.search_calls.append(query)
        if self.fail_search:
            request = httpx.Request("POST", "https://api.test/foods/search")
            response = httpx.Response(503, request=request)
            raise httpx.HTTPStatusError(
                "unavailable", request=request, response=response
            )
        return {"foods": self.searches.get(query, [])}

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls.append(fdc_id)
        return self.details[fdc_id]


@dataclass
class FakeTextClient(TextClient):
    """Fake text client returning a fixed output text."""

    items: list[dict[str, object]] = field(
        default_factory=lambda: [
            {
                "query": "egg",
                "display": "Eggs",
                "quantity": 3,
                "unit": "egg",
                "grams": None,
                "notes": None,
            },
            {
                "query": "spinach",
                "display": "Spinach",
                "quantity": 1,
                "unit": "cup",
                "grams": None,
                "notes": None,
            },
            {
                "query": "butter",
                "display": "Butter",
                "quantity": 1,
                "unit": "tbsp",
                "grams": None,
                "notes": None,
            },
        ]
    )
    output: str | None = None
    calls: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        instructions: str,
        text: str,
        schema: dict[str, object],
    ) -> str:
        self.calls.append(text)
        if self.output is not None:
            return self.output
        return json.dumps({"items": self.items})


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", fdc_api_key="fdc-key")


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def nutrition_service(fdc_client: FakeFdcClient) -> NutritionService:
    return NutritionService(fdc_client=fdc_client, cache=InMemoryCache())


@pytest.fixture
def custom_food_service() -> CustomFoodService:
    return CustomFoodService(InMemoryCustomFoodRepository())


@pytest.fixture
def resolver(
    nutrition_service: NutritionService, custom_food_service: CustomFoodService
) -> ItemResolver:
    return ItemResolver(
        nutrition_service=nutrition_service,
        custom_food_service=custom_food_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    text_client: FakeTextClient,
    nutrition_service: NutritionService,
    custom_food_service: CustomFoodService,
    resolver: ItemResolver,
) -> AppContainer:
    parse_service = ParseService(client=text_client, model=settings.openai_model)
    day_log_service = DayLogService(
        parse_service=parse_service,
        resolver=resolver,
        repository=InMemoryDayRepository(),
        thresholds=settings.advisory_thresholds(),
        preflight=settings.require_credentials,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        parse_service=parse_service,
        nutrition_service=nutrition_service,
        custom_food_service=custom_food_service,
        resolver=resolver,
        day_log_service=day_log_service,
        close_resources=close_resources,
    )
