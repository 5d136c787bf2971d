"""Normalization of FDC payloads and nutrient scaling."""

import math

from macro_monitor.domain.nutrition import FoodCandidate, FoodDetail, NutrientProfile

KJ_PER_KCAL = 4.184

_NUTRIENT_IDS = {
    1008: "calories",
    2048: "calories",
    2047: "calories",
    1062: "calories",
    1003: "protein",
    1004: "fat",
    1005: "carbs",
    1079: "fiber",
    1093: "sodium",
    1092: "potassium",
    1090: "magnesium",
}

# Legacy SR nutrient numbers reported alongside (or instead of) ids.
_NUTRIENT_NUMBERS = {
    "208": 1008,
    "958": 2048,
    "957": 2047,
    "268": 1062,
    "203": 1003,
    "204": 1004,
    "205": 1005,
    "291": 1079,
    "307": 1093,
    "306": 1092,
    "304": 1090,
}

# Lower wins when a record reports energy more than once.
_ENERGY_PRIORITY = {1008: 0, 2048: 1, 2047: 2, 1062: 3}
_KJ_IDS = {1062}
_MINERALS = {"sodium", "potassium", "magnesium"}
_WHOLE_NUMBER_FIELDS = {"calories", "sodium", "potassium", "magnesium"}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with halves rounded up."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def round_profile(profile: NutrientProfile) -> NutrientProfile:
    """Round energy and minerals to integers, macros to one decimal."""
    return NutrientProfile(
        **{
            name: round_half_up(value, 0 if name in _WHOLE_NUMBER_FIELDS else 1)
            for name, value in profile.as_dict().items()
        }
    )


def scale_raw(per_100g: NutrientProfile, grams: float) -> NutrientProfile:
    """Scale a per-100g profile to ``grams`` without rounding."""
    if not math.isfinite(grams) or grams <= 0:
        return NutrientProfile()
    return per_100g.multiply(grams / 100.0)


def scale(per_100g: NutrientProfile, grams: float) -> NutrientProfile:
    """Scale a per-100g profile to ``grams`` and round once at the end."""
    return round_profile(scale_raw(per_100g, grams))


def extract_per_100g(food_nutrients: object) -> tuple[NutrientProfile, bool]:
    """Extract tracked nutrients from FDC nutrient entries.

    Entries are identified by numeric nutrient id (or legacy nutrient number),
    never by name. Unknown ids and non-finite amounts are skipped. Returns the
    profile and whether any tracked nutrient was found.
    """
    values: dict[str, float] = {}
    energy_rank: int | None = None
    if not isinstance(food_nutrients, list):
        return NutrientProfile(), False

    for entry in food_nutrients:
        if not isinstance(entry, dict):
            continue
        nutrient_id = _nutrient_id(entry)
        field_name = _NUTRIENT_IDS.get(nutrient_id) if nutrient_id else None
        if field_name is None:
            continue
        amount = _finite_float(entry.get("amount", entry.get("value")))
        if amount is None:
            continue
        unit = _unit_name(entry)

        if field_name == "calories":
            rank = _ENERGY_PRIORITY[nutrient_id]
            if energy_rank is not None and rank >= energy_rank:
                continue
            if nutrient_id in _KJ_IDS or (unit and unit != "kcal"):
                amount = amount / KJ_PER_KCAL
            energy_rank = rank
            values[field_name] = amount
            continue

        if field_name in values:
            continue
        if field_name in _MINERALS and unit == "g":
            amount *= 1000
        values[field_name] = amount

    return NutrientProfile(**values), bool(values)


def parse_candidates(payload: object) -> list[FoodCandidate]:
    """Map a raw search payload into candidates, skipping unusable hits."""
    foods = payload.get("foods") if isinstance(payload, dict) else None
    if not isinstance(foods, list):
        return []
    candidates: list[FoodCandidate] = []
    for food in foods:
        if not isinstance(food, dict):
            continue
        fdc_id = _int_or_none(food.get("fdcId"))
        if fdc_id is None:
            continue
        nutrients = food.get("foodNutrients")
        candidates.append(
            FoodCandidate(
                fdc_id=fdc_id,
                description=str(food.get("description") or ""),
                data_type=str(food.get("dataType") or ""),
                has_nutrient_data=isinstance(nutrients, list) and bool(nutrients),
            )
        )
    return candidates


def parse_food_detail(payload: object, fdc_id: int) -> FoodDetail:
    """Map a raw food detail payload into a normalized detail record."""
    data = payload if isinstance(payload, dict) else {}
    per_100g, has_data = extract_per_100g(data.get("foodNutrients"))
    serving_unit = data.get("servingSizeUnit")
    return FoodDetail(
        fdc_id=_int_or_none(data.get("fdcId")) or fdc_id,
        description=str(data.get("description") or ""),
        per_100g=per_100g,
        has_nutrient_data=has_data,
        serving_size=_finite_float(data.get("servingSize")),
        serving_size_unit=str(serving_unit) if serving_unit else None,
    )


def _nutrient_id(entry: dict[str, object]) -> int | None:
    info = entry.get("nutrient")
    info = info if isinstance(info, dict) else {}
    nutrient_id = _int_or_none(info.get("id") or entry.get("nutrientId"))
    if nutrient_id in _NUTRIENT_IDS:
        return nutrient_id
    number = info.get("number") or entry.get("nutrientNumber")
    if number is None:
        return nutrient_id
    return _NUTRIENT_NUMBERS.get(str(number).strip(), nutrient_id)


def _unit_name(entry: dict[str, object]) -> str | None:
    info = entry.get("nutrient")
    info = info if isinstance(info, dict) else {}
    unit = info.get("unitName") or entry.get("unitName")
    if not unit:
        return None
    return str(unit).strip().lower()


def _finite_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _int_or_none(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None
