"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from donation_impact.adapters.supabase_configuration_repository import (
    SupabaseConfigurationRepository,
)
from donation_impact.adapters.supabase_donation_repository import (
    SupabaseDonationRecordRepository,
)
from donation_impact.config import Settings
from donation_impact.services.configuration import ImpactConfigurationService
from donation_impact.services.dashboard import ImpactDashboardService
from donation_impact.services.engine import ImpactMetricsEngine


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    configuration_service: ImpactConfigurationService
    engine: ImpactMetricsEngine
    dashboard_service: ImpactDashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    configuration_repository = SupabaseConfigurationRepository(
        supabase_client, table_name=resolved_settings.impact_configuration_table
    )
    record_repository = SupabaseDonationRecordRepository(
        supabase_client, table_name=resolved_settings.donation_records_table
    )
    configuration_service = ImpactConfigurationService(configuration_repository)
    engine = ImpactMetricsEngine(configuration_service)
    dashboard_service = ImpactDashboardService(
        repository=record_repository,
        engine=engine,
    )
    return AppContainer(
        settings=resolved_settings,
        configuration_service=configuration_service,
        engine=engine,
        dashboard_service=dashboard_service,
    )
