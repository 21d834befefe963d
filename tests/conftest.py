"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from donation_impact.config import Settings
from donation_impact.containers import AppContainer
from donation_impact.domain.categories import FoodCategory
from donation_impact.domain.dashboard import ImpactScope, ScopeKind
from donation_impact.domain.impact import DonationImpactRecord, PeriodWindow
from donation_impact.services.aggregation import as_utc
from donation_impact.services.configuration import (
    ImpactConfigurationRepository,
    ImpactConfigurationService,
)
from donation_impact.services.dashboard import (
    DonationRecordRepository,
    ImpactDashboardService,
)
from donation_impact.services.engine import ImpactMetricsEngine

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def make_record(
    record_id: str,
    weight_kg: float | None,
    event_time: datetime | None,
    categories: tuple[FoodCategory, ...] = (),
    status: str | None = "picked_up",
    pickup_time: datetime | None = None,
    expiration_time: datetime | None = None,
) -> DonationImpactRecord:
    return DonationImpactRecord(
        id=record_id,
        weight_kg=weight_kg,
        status=status,
        event_time=event_time,
        categories=categories,
        pickup_time=pickup_time,
        expiration_time=expiration_time,
    )


def week_window(now: datetime = NOW) -> PeriodWindow:
    return PeriodWindow(start=now - timedelta(days=7), end=now)


@dataclass
class ScopedRecord:
    record: DonationImpactRecord
    donor_id: str | None = None
    receiver_id: str | None = None


@dataclass
class InMemoryDonationRecordRepository(DonationRecordRepository):
    """In-memory donation record repository for tests."""

    rows: list[ScopedRecord] = field(default_factory=list)
    queries: list[tuple[ImpactScope, datetime, datetime]] = field(
        default_factory=list
    )

    def add(
        self,
        record: DonationImpactRecord,
        donor_id: str | None = None,
        receiver_id: str | None = None,
    ) -> None:
        self.rows.append(ScopedRecord(record, donor_id, receiver_id))

    def list_records(
        self, scope: ImpactScope, start: datetime, end: datetime
    ) -> list[DonationImpactRecord]:
        self.queries.append((scope, start, end))
        records = []
        for row in self.rows:
            if scope.kind is ScopeKind.DONOR and row.donor_id != scope.subject_id:
                continue
            if (
                scope.kind is ScopeKind.RECEIVER
                and row.receiver_id != scope.subject_id
            ):
                continue
            event_time = row.record.event_time
            if event_time is None or not start <= as_utc(event_time) <= end:
                continue
            records.append(row.record)
        return records


@dataclass
class InMemoryConfigurationRepository(ImpactConfigurationRepository):
    """In-memory configuration repository for tests."""

    active: dict[str, object] | None = None
    saved: list[dict[str, object]] = field(default_factory=list)
    fail_on_save: bool = False

    def get_active(self) -> dict[str, object] | None:
        return self.active

    def save_active(self, row: dict[str, object]) -> None:
        if self.fail_on_save:
            raise RuntimeError("configuration store unavailable")
        self.saved.append(row)
        self.active = row


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def record_repository() -> InMemoryDonationRecordRepository:
    return InMemoryDonationRecordRepository()


@pytest.fixture
def configuration_repository() -> InMemoryConfigurationRepository:
    return InMemoryConfigurationRepository()


@pytest.fixture
def configuration_service(
    configuration_repository: InMemoryConfigurationRepository,
) -> ImpactConfigurationService:
    return ImpactConfigurationService(configuration_repository)


@pytest.fixture
def engine(configuration_service: ImpactConfigurationService) -> ImpactMetricsEngine:
    return ImpactMetricsEngine(configuration_service)


@pytest.fixture
def container(
    settings: Settings,
    record_repository: InMemoryDonationRecordRepository,
    configuration_service: ImpactConfigurationService,
    engine: ImpactMetricsEngine,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        configuration_service=configuration_service,
        engine=engine,
        dashboard_service=ImpactDashboardService(
            repository=record_repository, engine=engine
        ),
    )
