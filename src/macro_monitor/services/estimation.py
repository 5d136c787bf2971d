"""Lexical mass estimation for items without a convertible unit."""

from macro_monitor.domain.parsing import ParsedItem

EGG_GRAMS = 50.0
TABLESPOON_GRAMS = 15.0
CUP_LEAFY_GRAMS = 30.0
CUP_GRAMS = 245.0
DEFAULT_GRAMS = 100.0


def estimate_grams(item: ParsedItem) -> float:
    """Return a best-guess mass in grams from the item's unit and name text.

    Rules are checked in order: eggs, tablespoons, cups (leafy spinach is much
    lighter per cup), then a flat 100 g that ignores the stated count.
    """
    text = item.text
    count = item.count
    if "egg" in text:
        return EGG_GRAMS * count
    if "tbsp" in text or "tablespoon" in text:
        return TABLESPOON_GRAMS * count
    if "cup" in text:
        if "spinach" in text:
            return CUP_LEAFY_GRAMS * count
        return CUP_GRAMS * count
    return DEFAULT_GRAMS
