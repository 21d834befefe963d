"""Domain models for impact computations."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from donation_impact.domain.categories import FoodCategory
from donation_impact.domain.factors import FactorSet

FULFILLED_STATUS = "picked_up"


@dataclass(frozen=True)
class DonationImpactRecord:
    """A completed or pending donation, reduced to what impact needs."""

    id: str
    weight_kg: float | None
    status: str | None
    event_time: datetime | None
    categories: tuple[FoodCategory, ...] = ()
    pickup_time: datetime | None = None
    expiration_time: datetime | None = None


@dataclass(frozen=True)
class PeriodWindow:
    """Inclusive timestamp range for one aggregation."""

    start: datetime
    end: datetime


class ExclusionReason(StrEnum):
    """Why a record did not contribute to a period's totals."""

    INVALID_RECORD = "invalid_record"
    MISSING_EVENT_TIME = "missing_event_time"
    OUTSIDE_WINDOW = "outside_window"
    STATUS_NOT_PICKED_UP = "status_not_picked_up"
    NON_POSITIVE_WEIGHT = "non_positive_weight"
    PICKED_UP_AFTER_EXPIRY = "picked_up_after_expiry"


@dataclass(frozen=True)
class InclusionDecision:
    """Outcome of the inclusion predicate for one record."""

    record: DonationImpactRecord | None
    reason: ExclusionReason | None

    @property
    def included(self) -> bool:
        return self.reason is None

    @property
    def record_id(self) -> str | None:
        return self.record.id if self.record is not None else None


@dataclass(frozen=True)
class ExcludedRecord:
    """Audit entry for a record that was left out."""

    record_id: str | None
    reason: ExclusionReason


@dataclass(frozen=True)
class MealRange:
    """Lower and upper bound on meals a weight can provide."""

    min_meals: int
    max_meals: int


@dataclass(frozen=True)
class ImpactTotals:
    """Summed impact for one period."""

    weight_kg: float
    co2_kg: float
    meals_estimated: int
    water_liters: float
    included_record_ids: tuple[str, ...] = ()


ZERO_TOTALS = ImpactTotals(weight_kg=0.0, co2_kg=0.0, meals_estimated=0, water_liters=0.0)


@dataclass(frozen=True)
class ImpactDelta:
    """Change between the current and previous period."""

    weight_kg: float | None
    co2_kg: float | None
    meals: int | None
    water_liters: float | None
    weight_pct: float | None
    co2_pct: float | None
    meals_pct: float | None
    water_pct: float | None


@dataclass(frozen=True)
class ImpactAudit:
    """Reproducible record of how a period's totals were derived."""

    window: PeriodWindow
    included_record_ids: tuple[str, ...]
    excluded: tuple[ExcludedRecord, ...]
    factor_set: FactorSet
    fingerprint: str


@dataclass(frozen=True)
class ImpactComputationResult:
    """Current and previous totals with their delta and audit trail."""

    current: ImpactTotals
    previous: ImpactTotals
    delta: ImpactDelta
    audit: ImpactAudit
