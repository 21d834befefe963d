"""Tests for role-scoped impact dashboards."""

from datetime import timedelta

from donation_impact.domain.categories import FoodCategory
from donation_impact.domain.dashboard import DateRange, ImpactScope, ScopeKind
from donation_impact.services.dashboard import ImpactDashboardService, export_csv
from donation_impact.services.serialization import serialize_report
from donation_impact.services.windows import EARLIEST
from tests.conftest import NOW, InMemoryDonationRecordRepository, make_record


def _seed(repository: InMemoryDonationRecordRepository) -> None:
    repository.add(
        make_record("a", 10.0, NOW - timedelta(days=2), (FoodCategory.BREAD,)),
        donor_id="donor-1",
        receiver_id="receiver-1",
    )
    repository.add(
        make_record("b", 15.0, NOW - timedelta(days=1), (FoodCategory.FRESH_MEAT,)),
        donor_id="donor-2",
        receiver_id="receiver-1",
    )
    repository.add(
        make_record("c", 10.0, NOW - timedelta(days=10)),
        donor_id="donor-1",
        receiver_id="receiver-2",
    )


def test_platform_weekly_report(
    container, record_repository: InMemoryDonationRecordRepository
) -> None:
    _seed(record_repository)
    service: ImpactDashboardService = container.dashboard_service

    report = service.get_metrics(ImpactScope.platform(), DateRange.WEEKLY, now=NOW)

    assert report.result.current.weight_kg == 25.0
    assert report.result.previous.weight_kg == 10.0
    assert report.result.delta.weight_pct == 150.0
    assert report.meal_range.min_meals == 41
    assert report.meal_range.max_meals == 63
    assert report.people_fed_estimate == 15
    assert report.records_considered == 3
    assert report.factor_version == "1.0-default"
    _, start, end = record_repository.queries[-1]
    assert report.previous_window is not None
    assert start == report.previous_window.start
    assert end == NOW


def test_donor_report_only_counts_donor_records(
    container, record_repository: InMemoryDonationRecordRepository
) -> None:
    _seed(record_repository)

    report = container.dashboard_service.get_metrics(
        ImpactScope(kind=ScopeKind.DONOR, subject_id="donor-1"),
        DateRange.WEEKLY,
        now=NOW,
    )

    assert report.result.current.included_record_ids == ("a",)
    assert report.result.previous.included_record_ids == ("c",)
    assert report.result.delta.weight_pct == 0.0


def test_all_time_report_has_no_trend(
    container, record_repository: InMemoryDonationRecordRepository
) -> None:
    _seed(record_repository)

    report = container.dashboard_service.get_metrics(
        ImpactScope(kind=ScopeKind.RECEIVER, subject_id="receiver-1"),
        DateRange.ALL_TIME,
        now=NOW,
    )

    assert report.window.start == EARLIEST
    assert report.previous_window is None
    assert report.result.current.weight_kg == 25.0
    assert report.result.delta.weight_kg is None
    document = serialize_report(report)
    assert document["previous_window"] is None
    assert document["result"]["delta"]["weight_pct"] is None


def test_report_document_shape(
    container, record_repository: InMemoryDonationRecordRepository
) -> None:
    _seed(record_repository)

    report = container.dashboard_service.get_metrics(
        ImpactScope.platform(), DateRange.WEEKLY, now=NOW
    )
    document = serialize_report(report)

    assert document["scope"] == "PLATFORM"
    assert document["date_range"] == "WEEKLY"
    assert document["meals_range"] == {"min": 41, "max": 63}
    assert set(document["result"]) == {"current", "previous", "delta", "audit"}
    assert document["result"]["current"]["co2_kg"] == 98.0
    assert document["result"]["audit"]["factor_set"]["version"] == "1.0-default"


def test_export_csv_sections(
    container, record_repository: InMemoryDonationRecordRepository
) -> None:
    _seed(record_repository)
    report = container.dashboard_service.get_metrics(
        ImpactScope.platform(), DateRange.WEEKLY, now=NOW
    )

    lines = export_csv(report).splitlines()

    assert lines[0] == "Metric,Value"
    assert "Environmental Impact" in lines
    assert "Total Food Weight (kg),25.00" in lines
    assert "Estimated Meals Provided (Range),41-63" in lines
    assert "CO2 Emissions Avoided (kg),98.00" in lines
    assert "Water Saved (liters),233000.00" in lines
    assert "Weight Change (%),150.0" in lines
    assert "Factor Version,1.0-default" in lines
    assert f"Audit Fingerprint,{report.result.audit.fingerprint}" in lines


def test_export_csv_marks_missing_trend(container) -> None:
    report = container.dashboard_service.get_metrics(
        ImpactScope.platform(), DateRange.ALL_TIME, now=NOW
    )

    lines = export_csv(report).splitlines()

    assert "Weight Change (%),N/A" in lines
    assert "Meals Change,N/A" in lines
