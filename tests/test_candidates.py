"""Tests for candidate selection."""

from macro_monitor.domain.nutrition import FoodCandidate
from macro_monitor.services.candidates import pick_best, score_candidate


def _candidate(fdc_id: int, data_type: str, has_data: bool = False) -> FoodCandidate:
    return FoodCandidate(
        fdc_id=fdc_id,
        description="food",
        data_type=data_type,
        has_nutrient_data=has_data,
    )


def test_empty_list_returns_none() -> None:
    assert pick_best([]) is None


def test_foundation_beats_sr_and_branded() -> None:
    candidates = [
        _candidate(1, "Branded"),
        _candidate(2, "Foundation"),
        _candidate(3, "SR Legacy"),
    ]

    assert pick_best(candidates) == candidates[1]


def test_ties_keep_search_order() -> None:
    candidates = [_candidate(1, "Branded"), _candidate(2, "Branded")]

    assert pick_best(candidates).fdc_id == 1


def test_nutrient_data_breaks_equal_types() -> None:
    candidates = [_candidate(1, "Survey (FNDDS)"), _candidate(2, "Survey (FNDDS)", True)]

    assert pick_best(candidates).fdc_id == 2


def test_scores() -> None:
    assert score_candidate(_candidate(1, "Foundation", True)) == 7
    assert score_candidate(_candidate(1, "SR Legacy")) == 5
    assert score_candidate(_candidate(1, "Survey (FNDDS)")) == 4
    assert score_candidate(_candidate(1, "Branded")) == 2
    assert score_candidate(_candidate(1, "Experimental")) == 0
