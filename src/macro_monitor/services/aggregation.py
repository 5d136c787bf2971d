"""Daily aggregation and threshold advisories."""

from dataclasses import dataclass

from macro_monitor.domain.days import Advisory, DailyTotals
from macro_monitor.domain.nutrition import NutrientProfile, ResolvedItem
from macro_monitor.services.nutrients import round_half_up, round_profile


@dataclass(frozen=True)
class AdvisoryThresholds:
    """Daily targets used to evaluate totals."""

    protein_target_g: float = 145.0
    net_carbs_max_g: float = 40.0
    net_carbs_min_g: float = 30.0
    protein_min_items: int = 2


def aggregate(items: list[ResolvedItem] | tuple[ResolvedItem, ...]) -> DailyTotals:
    """Sum items field-wise on unrounded values, rounding once at the end."""
    total = NutrientProfile()
    for item in items:
        total = total.plus(item.exact_nutrients)
    return DailyTotals(nutrients=round_profile(total), item_count=len(items))


def net_carbs(nutrients: NutrientProfile) -> float:
    """Total carbohydrate minus fiber, never negative."""
    return max(0.0, nutrients.carbs - nutrients.fiber)


def advise(
    totals: DailyTotals, thresholds: AdvisoryThresholds | None = None
) -> list[Advisory]:
    """Return every advisory triggered by the day's totals."""
    limits = thresholds or AdvisoryThresholds()
    advisories: list[Advisory] = []
    protein = totals.nutrients.protein
    net = net_carbs(totals.nutrients)

    enough_items = totals.item_count > limits.protein_min_items
    if protein < limits.protein_target_g and enough_items:
        deficit = _r1(limits.protein_target_g - protein)
        advisories.append(
            Advisory(
                kind="protein_low",
                message=f"Protein at {_r1(protein)}g, need {deficit}g more",
                amount=deficit,
            )
        )
    if net > limits.net_carbs_max_g:
        excess = _r1(net - limits.net_carbs_max_g)
        advisories.append(
            Advisory(
                kind="net_carbs_high",
                message=f"Net carbs {_r1(net)}g, above {limits.net_carbs_max_g:g}g",
                amount=excess,
            )
        )
    if 0 < net < limits.net_carbs_min_g:
        deficit = _r1(limits.net_carbs_min_g - net)
        advisories.append(
            Advisory(
                kind="net_carbs_low",
                message=f"Net carbs {_r1(net)}g, below {limits.net_carbs_min_g:g}g min",
                amount=deficit,
            )
        )
    return advisories


def _r1(value: float) -> float:
    return round_half_up(value, 1)
