"""Supabase repository for donation impact records."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from donation_impact.domain.categories import FoodCategory
from donation_impact.domain.dashboard import ImpactScope, ScopeKind
from donation_impact.domain.impact import DonationImpactRecord
from donation_impact.domain.units import Quantity
from donation_impact.services.conversion import convert_to_kg
from donation_impact.services.dashboard import DonationRecordRepository

_COLUMNS = (
    "id, status, event_time, weight_kg, quantity_value, quantity_unit, "
    "categories, pickup_time, expiration_time"
)

_SCOPE_COLUMNS = {
    ScopeKind.DONOR: "donor_id",
    ScopeKind.RECEIVER: "receiver_id",
}


@dataclass
class SupabaseDonationRecordRepository(DonationRecordRepository):
    """Supabase implementation reading the donation impact view."""

    client: Client
    table_name: str = "donation_impact_records"

    def list_records(
        self, scope: ImpactScope, start: datetime, end: datetime
    ) -> list[DonationImpactRecord]:
        """Return records for the scope with event times in [start, end]."""
        query = self.client.table(self.table_name).select(_COLUMNS)
        scope_column = _SCOPE_COLUMNS.get(scope.kind)
        if scope_column is not None:
            query = query.eq(scope_column, str(scope.subject_id))
        response = (
            query.gte("event_time", start.isoformat())
            .lte("event_time", end.isoformat())
            .order("event_time", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> DonationImpactRecord:
    status = row.get("status")
    return DonationImpactRecord(
        id=str(row.get("id")),
        weight_kg=_parse_weight(row),
        status=status if isinstance(status, str) else None,
        event_time=_parse_datetime(row.get("event_time")),
        categories=_parse_categories(row.get("categories")),
        pickup_time=_parse_datetime(row.get("pickup_time")),
        expiration_time=_parse_datetime(row.get("expiration_time")),
    )


def _parse_weight(row: dict[str, object]) -> float:
    weight = row.get("weight_kg")
    if isinstance(weight, int | float) and not isinstance(weight, bool):
        return float(weight)
    if isinstance(weight, str) and weight.strip():
        try:
            return float(weight)
        except ValueError:
            return 0.0
    quantity = Quantity.from_raw(row.get("quantity_value"), row.get("quantity_unit"))
    return convert_to_kg(quantity)


def _parse_datetime(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _parse_categories(raw: object) -> tuple[FoodCategory, ...]:
    if isinstance(raw, str):
        raw = raw.strip("{}").split(",")
    if not isinstance(raw, list | tuple):
        return ()
    parsed = (FoodCategory.parse(name) for name in raw)
    return tuple(category for category in parsed if category is not None)
