"""Meal estimates derived from rescued food weight."""

import math
from decimal import ROUND_FLOOR, Decimal, localcontext

from donation_impact.domain.factors import FactorSet
from donation_impact.domain.impact import MealRange


def calculate_meal_range(weight_kg: float | None, factor_set: FactorSet) -> MealRange:
    """Return the band of meals a weight can provide.

    The heaviest plausible meal gives the lower bound and the lightest gives
    the upper bound.
    """
    weight = _usable_weight(weight_kg)
    return MealRange(
        min_meals=_whole_meals(weight / factor_set.max_meal_weight_kg, math.floor),
        max_meals=_whole_meals(weight / factor_set.min_meal_weight_kg, math.ceil),
    )


def estimate_meals(weight_kg: float | None, factor_set: FactorSet) -> int:
    """Return the headline meals figure, using the reference meal weight."""
    weight = _usable_weight(weight_kg)
    meals = weight / factor_set.reference_meal_weight_kg
    if not math.isfinite(meals):
        return 0
    return round_half_up(meals)


def round_half_up(value: float, places: int = 0) -> float | int:
    """Round halves towards positive infinity, so -2.25 becomes -2.2.

    value must be finite.
    """
    exponent = Decimal(1).scaleb(-places)
    decimal_value = Decimal(repr(value))
    with localcontext() as context:
        # Enough digits for the integer part so quantize never overflows.
        context.prec = max(context.prec, decimal_value.adjusted() + places + 3)
        shifted = decimal_value + exponent / 2
        rounded = shifted.quantize(exponent, rounding=ROUND_FLOOR)
    if places == 0:
        return int(rounded)
    return float(rounded)


def _whole_meals(meals: float, rounder) -> int:  # type: ignore[no-untyped-def]
    if not math.isfinite(meals):
        return 0
    return rounder(meals)


def _usable_weight(weight_kg: float | None) -> float:
    if weight_kg is None or not math.isfinite(weight_kg) or weight_kg <= 0:
        return 0.0
    return weight_kg
