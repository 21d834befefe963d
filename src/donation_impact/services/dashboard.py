"""Role-scoped impact dashboards."""

import csv
import io
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from donation_impact.domain.dashboard import DateRange, ImpactReport, ImpactScope
from donation_impact.domain.impact import DonationImpactRecord, ImpactDelta
from donation_impact.services.engine import ImpactMetricsEngine
from donation_impact.services.meals import calculate_meal_range
from donation_impact.services.windows import resolve_windows

MEALS_PER_PERSON_PER_DAY = 3


class DonationRecordRepository(Protocol):
    """Source of donation impact records for a scope."""

    def list_records(
        self, scope: ImpactScope, start: datetime, end: datetime
    ) -> list[DonationImpactRecord]:
        """Return the scope's records with event times in the range."""


@dataclass
class ImpactDashboardService:
    """Build donor, receiver and platform impact reports."""

    repository: DonationRecordRepository
    engine: ImpactMetricsEngine

    def get_metrics(
        self,
        scope: ImpactScope,
        date_range: DateRange,
        now: datetime | None = None,
    ) -> ImpactReport:
        """Return the impact report for a scope and date range."""
        current, previous = resolve_windows(date_range, now)
        span_start = previous.start if previous else current.start
        records = self.repository.list_records(scope, span_start, current.end)
        factor_set = self.engine.configuration.current()
        result = self.engine.compute(records, current, previous, factor_set)
        meals = result.current.meals_estimated
        return ImpactReport(
            scope=scope,
            date_range=date_range,
            window=current,
            previous_window=previous,
            result=result,
            meal_range=calculate_meal_range(result.current.weight_kg, factor_set),
            people_fed_estimate=meals // MEALS_PER_PERSON_PER_DAY,
            records_considered=len(records),
            factor_version=factor_set.version,
            factor_disclosure=factor_set.disclosure_text,
            generated_at=datetime.now(tz=UTC),
        )


def export_csv(report: ImpactReport) -> str:
    """Render a report as a two-column Metric,Value CSV."""
    current = report.result.current
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Metric", "Value"])
    writer.writerow(["Scope", report.scope.kind.value])
    if report.scope.subject_id:
        writer.writerow(["Subject", report.scope.subject_id])
    writer.writerow(["Date Range", report.date_range.value])
    writer.writerow(["Start Date", report.window.start.isoformat()])
    writer.writerow(["End Date", report.window.end.isoformat()])
    writer.writerow([])

    writer.writerow(["Environmental Impact"])
    writer.writerow(["Total Food Weight (kg)", f"{current.weight_kg:.2f}"])
    writer.writerow(
        [
            "Estimated Meals Provided (Range)",
            f"{report.meal_range.min_meals}-{report.meal_range.max_meals}",
        ]
    )
    writer.writerow(["Estimated Meals Provided", current.meals_estimated])
    writer.writerow(["CO2 Emissions Avoided (kg)", f"{current.co2_kg:.2f}"])
    writer.writerow(["Water Saved (liters)", f"{current.water_liters:.2f}"])
    writer.writerow(["People Fed (estimate)", report.people_fed_estimate])
    writer.writerow(["Donations Counted", len(current.included_record_ids)])
    writer.writerow([])

    writer.writerow(["Trend vs Previous Period"])
    for label, value in _delta_rows(report.result.delta):
        writer.writerow([label, value])
    writer.writerow([])

    writer.writerow(["Calculation Metadata"])
    writer.writerow(["Factor Version", report.factor_version])
    writer.writerow(["Disclosure", report.factor_disclosure or "N/A"])
    writer.writerow(["Audit Fingerprint", report.result.audit.fingerprint])
    return buffer.getvalue()


def _delta_rows(delta: ImpactDelta) -> list[tuple[str, str]]:
    return [
        ("Weight Change (kg)", _format_optional(delta.weight_kg, "{:.2f}")),
        ("Weight Change (%)", _format_optional(delta.weight_pct, "{:.1f}")),
        ("CO2 Change (kg)", _format_optional(delta.co2_kg, "{:.2f}")),
        ("CO2 Change (%)", _format_optional(delta.co2_pct, "{:.1f}")),
        ("Meals Change", _format_optional(delta.meals, "{}")),
        ("Meals Change (%)", _format_optional(delta.meals_pct, "{:.1f}")),
        ("Water Change (liters)", _format_optional(delta.water_liters, "{:.2f}")),
        ("Water Change (%)", _format_optional(delta.water_pct, "{:.1f}")),
    ]


def _format_optional(value: float | int | None, template: str) -> str:
    if value is None:
        return "N/A"
    return template.format(value)
