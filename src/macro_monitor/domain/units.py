"""Mass units and their gram factors."""

GRAMS_PER_UNIT: dict[str, float] = {
    "g": 1.0,
    "gr": 1.0,
    "grm": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "kgs": 1000.0,
    "kilogram": 1000.0,
    "kilograms": 1000.0,
    "oz": 28.349523125,
    "ounce": 28.349523125,
    "ounces": 28.349523125,
    "lb": 453.59237,
    "lbs": 453.59237,
    "pound": 453.59237,
    "pounds": 453.59237,
    "mg": 0.001,
    "milligram": 0.001,
    "milligrams": 0.001,
}


def grams_per_unit(unit: str | None) -> float:
    """Return grams per one ``unit``, or 0 when the unit is not a mass unit."""
    if not unit:
        return 0.0
    return GRAMS_PER_UNIT.get(unit.strip().lower(), 0.0)
