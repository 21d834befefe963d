"""Domain models for role-scoped impact dashboards."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from donation_impact.domain.impact import ImpactComputationResult, MealRange, PeriodWindow


class DateRange(StrEnum):
    """Reporting ranges offered on the dashboard."""

    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    ALL_TIME = "ALL_TIME"


class ScopeKind(StrEnum):
    """Whose donations a report covers."""

    DONOR = "DONOR"
    RECEIVER = "RECEIVER"
    PLATFORM = "PLATFORM"


@dataclass(frozen=True)
class ImpactScope:
    """A donor, a receiver, or the whole platform."""

    kind: ScopeKind
    subject_id: str | None = None

    @classmethod
    def platform(cls) -> "ImpactScope":
        return cls(kind=ScopeKind.PLATFORM)


@dataclass(frozen=True)
class ImpactReport:
    """Dashboard view over one impact computation."""

    scope: ImpactScope
    date_range: DateRange
    window: PeriodWindow
    previous_window: PeriodWindow | None
    result: ImpactComputationResult
    meal_range: MealRange
    people_fed_estimate: int
    records_considered: int
    factor_version: str
    factor_disclosure: str | None
    generated_at: datetime
