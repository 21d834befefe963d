"""Period-over-period comparison of impact totals."""

import math

from donation_impact.domain.impact import ImpactDelta, ImpactTotals
from donation_impact.services.meals import round_half_up


def compute_delta(current: ImpactTotals, previous: ImpactTotals) -> ImpactDelta:
    """Return absolute and percentage change from previous to current."""
    return ImpactDelta(
        weight_kg=current.weight_kg - previous.weight_kg,
        co2_kg=current.co2_kg - previous.co2_kg,
        meals=current.meals_estimated - previous.meals_estimated,
        water_liters=current.water_liters - previous.water_liters,
        weight_pct=percent_change(current.weight_kg, previous.weight_kg),
        co2_pct=percent_change(current.co2_kg, previous.co2_kg),
        meals_pct=percent_change(current.meals_estimated, previous.meals_estimated),
        water_pct=percent_change(current.water_liters, previous.water_liters),
    )


def percent_change(current: float, previous: float) -> float | None:
    """Return the change as a percentage of previous, to one decimal.

    None means there is no usable baseline to compare against.
    """
    if previous == 0:
        return None
    pct = ((current - previous) / previous) * 100
    if not math.isfinite(pct):
        return None
    return round_half_up(pct, places=1)


def unavailable_delta() -> ImpactDelta:
    """Return a delta for scopes that have no previous period."""
    return ImpactDelta(
        weight_kg=None,
        co2_kg=None,
        meals=None,
        water_liters=None,
        weight_pct=None,
        co2_pct=None,
        meals_pct=None,
        water_pct=None,
    )
