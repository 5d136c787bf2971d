"""Tests for daily aggregation and advisories."""

from macro_monitor.domain.days import DailyTotals
from macro_monitor.domain.nutrition import NutrientProfile, ResolvedItem, SourceTag
from macro_monitor.services.aggregation import (
    AdvisoryThresholds,
    advise,
    aggregate,
    net_carbs,
)
from macro_monitor.services.nutrients import round_profile


def _item(raw: NutrientProfile) -> ResolvedItem:
    return ResolvedItem(
        name="item",
        nutrients=round_profile(raw),
        raw_nutrients=raw,
        source=SourceTag.MATCHED,
    )


def test_aggregate_rounds_once_on_raw_values() -> None:
    a = NutrientProfile(calories=100.4, protein=10.04, sodium=0.4)
    b = NutrientProfile(calories=100.4, protein=10.04, sodium=0.4)

    totals = aggregate([_item(a), _item(b)])

    assert totals.nutrients == round_profile(a.plus(b))
    assert totals.nutrients.calories == 201
    assert totals.nutrients.protein == 20.1
    assert totals.nutrients.sodium == 1
    assert totals.item_count == 2


def test_aggregate_uses_rounded_values_when_raw_missing() -> None:
    item = ResolvedItem(
        name="saved",
        nutrients=NutrientProfile(calories=50, carbs=3.2),
        source=SourceTag.CUSTOM,
    )

    totals = aggregate([item, item])

    assert totals.nutrients.calories == 100
    assert totals.nutrients.carbs == 6.4


def test_aggregate_empty_day() -> None:
    assert aggregate([]) == DailyTotals()


def test_net_carbs_never_negative() -> None:
    assert net_carbs(NutrientProfile(carbs=20, fiber=25)) == 0
    assert net_carbs(NutrientProfile(carbs=50, fiber=5)) == 45


def test_protein_and_carb_warnings_fire_together() -> None:
    totals = DailyTotals(
        nutrients=NutrientProfile(protein=100, carbs=50, fiber=5), item_count=3
    )

    advisories = advise(totals)

    assert [advisory.kind for advisory in advisories] == [
        "protein_low",
        "net_carbs_high",
    ]
    assert advisories[0].amount == 45
    assert advisories[1].amount == 5
    assert "need 45.0g more" in advisories[0].message


def test_protein_warning_waits_for_more_items() -> None:
    totals = DailyTotals(nutrients=NutrientProfile(protein=20, carbs=35), item_count=2)

    assert advise(totals) == []


def test_low_carb_warning_only_after_food_logged() -> None:
    empty = DailyTotals()
    low = DailyTotals(nutrients=NutrientProfile(carbs=12, fiber=2), item_count=1)

    assert advise(empty) == []
    advisories = advise(low)
    assert [advisory.kind for advisory in advisories] == ["net_carbs_low"]
    assert advisories[0].amount == 20


def test_thresholds_are_configurable() -> None:
    totals = DailyTotals(nutrients=NutrientProfile(protein=100, carbs=35), item_count=5)
    thresholds = AdvisoryThresholds(protein_target_g=90, net_carbs_max_g=30)

    advisories = advise(totals, thresholds)

    assert [advisory.kind for advisory in advisories] == ["net_carbs_high"]
