"""Impact metrics engine: current vs previous period with an audit trail."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from donation_impact.domain.factors import FactorSet
from donation_impact.domain.impact import (
    ZERO_TOTALS,
    DonationImpactRecord,
    ImpactComputationResult,
    PeriodWindow,
)
from donation_impact.services.aggregation import decide_inclusions, totals_from_decisions
from donation_impact.services.audit import build_audit
from donation_impact.services.configuration import ImpactConfigurationService
from donation_impact.services.delta import compute_delta, unavailable_delta

_logger = logging.getLogger(__name__)


@dataclass
class ImpactMetricsEngine:
    """Compute impact totals, deltas and audits for caller-supplied records."""

    configuration: ImpactConfigurationService

    def compute(
        self,
        records: Iterable[DonationImpactRecord | None] | None,
        current: PeriodWindow,
        previous: PeriodWindow | None = None,
        factor_set: FactorSet | None = None,
    ) -> ImpactComputationResult:
        """Aggregate both windows against a single factor snapshot.

        Pass previous=None for all-time scopes: previous totals are then zero
        and every delta field is None.
        """
        snapshot = factor_set or self.configuration.current()
        materialized = list(records or ())

        current_decisions = decide_inclusions(materialized, current)
        current_totals = totals_from_decisions(current_decisions, snapshot)

        if previous is None:
            previous_totals = ZERO_TOTALS
            delta = unavailable_delta()
        else:
            previous_totals = totals_from_decisions(
                decide_inclusions(materialized, previous), snapshot
            )
            delta = compute_delta(current_totals, previous_totals)

        audit = build_audit(materialized, current_decisions, snapshot, current)
        _logger.info(
            "Impact computed: version=%s records=%s included=%s weight=%.3f kg "
            "co2=%.3f kg meals=%s",
            snapshot.version,
            len(materialized),
            len(current_totals.included_record_ids),
            current_totals.weight_kg,
            current_totals.co2_kg,
            current_totals.meals_estimated,
        )
        return ImpactComputationResult(
            current=current_totals,
            previous=previous_totals,
            delta=delta,
            audit=audit,
        )
