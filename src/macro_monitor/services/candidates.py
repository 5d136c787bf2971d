"""Scoring and selection of food search candidates."""

from macro_monitor.domain.nutrition import FoodCandidate

_DATA_TYPE_SCORES = (
    ("foundation", 6),
    ("sr", 5),
    ("survey", 4),
    ("branded", 2),
)


def score_candidate(candidate: FoodCandidate) -> int:
    """Score a candidate, preferring curated reference data over branded."""
    tag = candidate.data_type.lower()
    score = sum(points for marker, points in _DATA_TYPE_SCORES if marker in tag)
    if candidate.has_nutrient_data:
        score += 1
    return score


def pick_best(candidates: list[FoodCandidate]) -> FoodCandidate | None:
    """Return the highest scoring candidate, keeping search order on ties."""
    if not candidates:
        return None
    return max(candidates, key=score_candidate)
