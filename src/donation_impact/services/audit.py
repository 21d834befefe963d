"""Audit trails for impact computations."""

import hashlib
import json
from collections.abc import Iterable, Sequence

from donation_impact.domain.factors import FactorSet
from donation_impact.domain.impact import (
    DonationImpactRecord,
    ExcludedRecord,
    ImpactAudit,
    ImpactTotals,
    InclusionDecision,
    PeriodWindow,
)
from donation_impact.services.aggregation import aggregate
from donation_impact.services.serialization import (
    serialize_excluded,
    serialize_factor_set,
    serialize_window,
)


def build_audit(
    records: Sequence[DonationImpactRecord | None],
    decisions: Sequence[InclusionDecision],
    factor_set: FactorSet,
    window: PeriodWindow,
) -> ImpactAudit:
    """Capture which records counted and the factors applied to them.

    The factor set is an immutable value, so holding a reference is a
    snapshot: later reloads of the live configuration do not change it.
    """
    if len(records) != len(decisions):
        raise ValueError("every record needs exactly one inclusion decision")
    included: list[str] = []
    excluded: list[ExcludedRecord] = []
    for decision in decisions:
        if decision.reason is None and decision.record is not None:
            included.append(decision.record.id)
        elif decision.reason is not None:
            excluded.append(
                ExcludedRecord(record_id=decision.record_id, reason=decision.reason)
            )
    included_ids = tuple(included)
    excluded_records = tuple(excluded)
    return ImpactAudit(
        window=window,
        included_record_ids=included_ids,
        excluded=excluded_records,
        factor_set=factor_set,
        fingerprint=audit_fingerprint(
            window, included_ids, excluded_records, factor_set
        ),
    )


def audit_fingerprint(
    window: PeriodWindow,
    included_record_ids: Iterable[str],
    excluded: Iterable[ExcludedRecord],
    factor_set: FactorSet,
) -> str:
    """Return a SHA-256 digest over the canonical audit content."""
    payload = {
        "window": serialize_window(window),
        "included_record_ids": list(included_record_ids),
        "excluded": [serialize_excluded(entry) for entry in excluded],
        "factor_set": serialize_factor_set(factor_set),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def verify_fingerprint(audit: ImpactAudit) -> bool:
    """Return True when the audit content still matches its fingerprint."""
    expected = audit_fingerprint(
        audit.window, audit.included_record_ids, audit.excluded, audit.factor_set
    )
    return expected == audit.fingerprint


def replay_audit(
    audit: ImpactAudit, records: Iterable[DonationImpactRecord | None]
) -> ImpactTotals:
    """Recompute totals using only what the audit captured."""
    return aggregate(records, audit.window.start, audit.window.end, audit.factor_set)
