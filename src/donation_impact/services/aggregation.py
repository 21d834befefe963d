"""Period aggregation of donation impact records."""

import math
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from donation_impact.domain.factors import FactorSet
from donation_impact.domain.impact import (
    FULFILLED_STATUS,
    DonationImpactRecord,
    ExclusionReason,
    ImpactTotals,
    InclusionDecision,
    PeriodWindow,
)
from donation_impact.services.factors import FactorResolver
from donation_impact.services.meals import estimate_meals


def aggregate(
    records: Iterable[DonationImpactRecord | None] | None,
    window_start: datetime,
    window_end: datetime,
    factor_set: FactorSet,
) -> ImpactTotals:
    """Sum the impact of fulfilled donations inside the window."""
    window = PeriodWindow(start=window_start, end=window_end)
    decisions = decide_inclusions(records, window)
    return totals_from_decisions(decisions, factor_set)


def decide_inclusions(
    records: Iterable[DonationImpactRecord | None] | None, window: PeriodWindow
) -> list[InclusionDecision]:
    """Apply the inclusion predicate to every record, keeping input order."""
    return [
        InclusionDecision(record=record, reason=classify_record(record, window))
        for record in records or ()
    ]


def classify_record(
    record: DonationImpactRecord | None, window: PeriodWindow
) -> ExclusionReason | None:
    """Return why a record is excluded, or None when it counts."""
    if record is None:
        return ExclusionReason.INVALID_RECORD
    if record.event_time is None:
        return ExclusionReason.MISSING_EVENT_TIME
    event_time = as_utc(record.event_time)
    if event_time < as_utc(window.start) or event_time > as_utc(window.end):
        return ExclusionReason.OUTSIDE_WINDOW
    if (record.status or "").casefold() != FULFILLED_STATUS:
        return ExclusionReason.STATUS_NOT_PICKED_UP
    weight = record.weight_kg
    if weight is None or not math.isfinite(weight) or weight <= 0:
        return ExclusionReason.NON_POSITIVE_WEIGHT
    if (
        record.pickup_time is not None
        and record.expiration_time is not None
        and as_utc(record.pickup_time) > as_utc(record.expiration_time)
    ):
        return ExclusionReason.PICKED_UP_AFTER_EXPIRY
    return None


def totals_from_decisions(
    decisions: Sequence[InclusionDecision], factor_set: FactorSet
) -> ImpactTotals:
    """Sum included records; CO2 and water are weighted per record."""
    resolver = FactorResolver(factor_set)
    total_weight = 0.0
    total_co2 = 0.0
    total_water = 0.0
    included_ids: list[str] = []
    for decision in decisions:
        record = decision.record
        if not decision.included or record is None:
            continue
        weight = float(record.weight_kg or 0.0)
        total_weight += weight
        total_co2 += resolver.calculate_co2_avoided(weight, record.categories)
        total_water += resolver.calculate_water_saved(weight, record.categories)
        included_ids.append(record.id)

    return ImpactTotals(
        weight_kg=total_weight,
        co2_kg=total_co2,
        meals_estimated=estimate_meals(total_weight, factor_set),
        water_liters=total_water,
        included_record_ids=tuple(included_ids),
    )


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so comparisons never raise."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
