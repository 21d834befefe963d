"""Supabase repository for impact factor configurations."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from donation_impact.services.configuration import ImpactConfigurationRepository


@dataclass
class SupabaseConfigurationRepository(ImpactConfigurationRepository):
    """Supabase implementation for versioned factor configurations."""

    client: Client
    table_name: str = "impact_configuration"

    def get_active(self) -> dict[str, object] | None:
        """Return the active configuration row."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("is_active", True)
            .order("updated_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def save_active(self, row: dict[str, object]) -> None:
        """Upsert the row by version and deactivate every other version."""
        now = datetime.now(tz=UTC).isoformat()
        self.client.table(self.table_name).upsert(
            {**row, "is_active": True, "updated_at": now},
            on_conflict="version",
        ).execute()
        self.client.table(self.table_name).update(
            {"is_active": False, "updated_at": now}
        ).neq("version", row["version"]).execute()
