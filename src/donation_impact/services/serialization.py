"""JSON-ready documents for impact results."""

from donation_impact.domain.dashboard import ImpactReport
from donation_impact.domain.factors import FactorSet
from donation_impact.domain.impact import (
    ExcludedRecord,
    ImpactAudit,
    ImpactComputationResult,
    ImpactDelta,
    ImpactTotals,
    PeriodWindow,
)


def serialize_result(result: ImpactComputationResult) -> dict[str, object]:
    """Return the single document consumed by the reporting layer."""
    return {
        "current": serialize_totals(result.current),
        "previous": serialize_totals(result.previous),
        "delta": serialize_delta(result.delta),
        "audit": serialize_audit(result.audit),
    }


def serialize_totals(totals: ImpactTotals) -> dict[str, object]:
    return {
        "weight_kg": totals.weight_kg,
        "co2_kg": totals.co2_kg,
        "meals_estimated": totals.meals_estimated,
        "water_liters": totals.water_liters,
        "included_record_ids": list(totals.included_record_ids),
    }


def serialize_delta(delta: ImpactDelta) -> dict[str, object]:
    return {
        "weight_kg": delta.weight_kg,
        "co2_kg": delta.co2_kg,
        "meals": delta.meals,
        "water_liters": delta.water_liters,
        "weight_pct": delta.weight_pct,
        "co2_pct": delta.co2_pct,
        "meals_pct": delta.meals_pct,
        "water_pct": delta.water_pct,
    }


def serialize_audit(audit: ImpactAudit) -> dict[str, object]:
    return {
        "window": serialize_window(audit.window),
        "included_record_ids": list(audit.included_record_ids),
        "excluded": [serialize_excluded(entry) for entry in audit.excluded],
        "factor_set": serialize_factor_set(audit.factor_set),
        "fingerprint": audit.fingerprint,
    }


def serialize_window(window: PeriodWindow) -> dict[str, str]:
    return {"start": window.start.isoformat(), "end": window.end.isoformat()}


def serialize_excluded(entry: ExcludedRecord) -> dict[str, object]:
    return {"id": entry.record_id, "reason": entry.reason.value}


def serialize_factor_set(factor_set: FactorSet) -> dict[str, object]:
    """Return every value that influences a computation."""
    return {
        "version": factor_set.version,
        "co2_factors": {
            category.value: value for category, value in factor_set.co2_factors.items()
        },
        "water_factors": {
            category.value: value
            for category, value in factor_set.water_factors.items()
        },
        "default_co2_factor": factor_set.default_co2_factor,
        "default_water_factor": factor_set.default_water_factor,
        "min_meal_weight_kg": factor_set.min_meal_weight_kg,
        "max_meal_weight_kg": factor_set.max_meal_weight_kg,
        "reference_meal_weight_kg": factor_set.reference_meal_weight_kg,
        "category_precedence": [
            category.value for category in factor_set.category_precedence
        ],
        "disclosure_text": factor_set.disclosure_text,
    }


def serialize_report(report: ImpactReport) -> dict[str, object]:
    """Return the dashboard document for a report."""
    return {
        "scope": report.scope.kind.value,
        "subject_id": report.scope.subject_id,
        "date_range": report.date_range.value,
        "window": serialize_window(report.window),
        "previous_window": serialize_window(report.previous_window)
        if report.previous_window
        else None,
        "meals_range": {
            "min": report.meal_range.min_meals,
            "max": report.meal_range.max_meals,
        },
        "people_fed_estimate": report.people_fed_estimate,
        "records_considered": report.records_considered,
        "factor_version": report.factor_version,
        "factor_disclosure": report.factor_disclosure,
        "generated_at": report.generated_at.isoformat(),
        "result": serialize_result(report.result),
    }
