"""
Revenue Impact Model

Applies a policy change to every income cohort and aggregates the mechanical
gain, the revenue lost to out-migration, and the net change.

For each cohort:
1. Additional tax per filer from the policy (NYC part weighted by residency)
2. Mechanical gain = additional tax x filers
3. Migration share from the behavioral model
4. Migration loss = leaving filers x (existing tax + additional tax)
5. Net change = mechanical gain - migration loss

Departing filers take ALL of their tax contribution with them, not just the
increment. This is a deliberate conservative-loss assumption.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .behavior import BehavioralParams, compute_migration_share
from .brackets import compute_surcharge
from .data.cohorts import IncomeCohort, get_cohorts
from .offset import compute_middle_income_offset
from .policies import ModelInput, PolicyChange

logger = logging.getLogger(__name__)


@dataclass
class CohortResult:
    """
    Revenue impact of a policy on one cohort.

    Attributes:
        cohort: The cohort evaluated
        additional_tax_per_filer: Added tax per filer before behavioral response
        mechanical_gain: Revenue gain with no behavioral response
        migration_share: Share of filers projected to leave
        migration_loss: Revenue lost with departing filers (existing + new tax)
        net_revenue_change: mechanical_gain - migration_loss
    """
    cohort: IncomeCohort
    additional_tax_per_filer: float
    mechanical_gain: float
    migration_share: float
    migration_loss: float
    net_revenue_change: float

    @property
    def leaving_filers(self) -> float:
        return self.cohort.filer_count * self.migration_share


@dataclass
class ModelOutput:
    """
    Aggregate result of a model run.

    Offset fields are None when the policy raises revenue on net.
    """
    cohort_results: List[CohortResult]
    total_mechanical_gain: float
    total_behavioral_loss: float
    net_revenue_change: float
    baseline_revenue: float
    middle_income_offset: Optional[float]
    middle_income_offset_per_filer: Optional[float]
    middle_income_offset_pct_income: Optional[float]
    middle_income_filer_count: float
    time_horizon: int

    @property
    def weighted_migration_share(self) -> float:
        """Average migration share weighted by cohort filer count."""
        total_filers = sum(r.cohort.filer_count for r in self.cohort_results)
        if total_filers == 0:
            return 0.0
        weighted = sum(r.migration_share * r.cohort.filer_count for r in self.cohort_results)
        return weighted / total_filers

    @property
    def net_change_pct_of_baseline(self) -> float:
        if self.baseline_revenue == 0:
            return 0.0
        return self.net_revenue_change / self.baseline_revenue

    @property
    def is_revenue_positive(self) -> bool:
        return self.net_revenue_change >= 0


def compute_additional_tax_per_filer(avg_agi: float,
                                     policy: PolicyChange,
                                     is_nyc_resident: bool) -> float:
    """
    Per-filer additional tax from a policy change at a given income.

    The flat rate change applies to full income. A surcharge needs both a
    positive rate and a positive threshold. The NYC surcharge applies
    only to NYC residents, and only when the policy includes NYC.
    """
    additional_tax = 0.0

    if policy.flat_rate_change != 0:
        additional_tax += avg_agi * policy.flat_rate_change

    if policy.surcharge_rate > 0 and policy.surcharge_threshold > 0:
        additional_tax += compute_surcharge(avg_agi, policy.surcharge_rate, policy.surcharge_threshold)

    if (is_nyc_resident and policy.include_nyc
            and policy.nyc_surcharge_rate > 0 and policy.nyc_surcharge_threshold > 0):
        additional_tax += compute_surcharge(avg_agi, policy.nyc_surcharge_rate, policy.nyc_surcharge_threshold)

    return additional_tax


def evaluate_cohort(cohort: IncomeCohort,
                    policy: PolicyChange,
                    behavioral: BehavioralParams,
                    time_horizon: int) -> CohortResult:
    """Revenue impact of a policy on a single cohort."""
    avg_agi = cohort.avg_agi

    # Statewide changes reach every filer; NYC changes only the resident share
    additional_tax_nys = compute_additional_tax_per_filer(
        avg_agi, replace(policy, include_nyc=False), False
    )
    additional_tax_nyc = (
        compute_additional_tax_per_filer(avg_agi, policy, True) - additional_tax_nys
        if policy.include_nyc else 0.0
    )
    additional_tax_per_filer = additional_tax_nys + additional_tax_nyc * cohort.nyc_resident_share

    mechanical_gain = additional_tax_per_filer * cohort.filer_count

    migration_share = compute_migration_share(
        additional_tax_per_filer, avg_agi, behavioral, time_horizon
    )

    leaving_filers = cohort.filer_count * migration_share
    migration_loss = leaving_filers * (cohort.existing_tax_per_filer + additional_tax_per_filer)

    return CohortResult(
        cohort=cohort,
        additional_tax_per_filer=additional_tax_per_filer,
        mechanical_gain=mechanical_gain,
        migration_share=migration_share,
        migration_loss=migration_loss,
        net_revenue_change=mechanical_gain - migration_loss,
    )


def run_model(model_input: ModelInput,
              cohorts: Optional[Sequence[IncomeCohort]] = None) -> ModelOutput:
    """
    Run the revenue model over every cohort.

    Args:
        model_input: Policy, behavioral parameters, horizon and offset band
        cohorts: Cohort table; defaults to the embedded table for
                 model_input.data_year

    Returns:
        ModelOutput with per-cohort results, totals and the middle-income offset
    """
    if cohorts is None:
        cohorts = get_cohorts(model_input.data_year)

    cohort_results = [
        evaluate_cohort(c, model_input.policy, model_input.behavioral, model_input.time_horizon)
        for c in cohorts
    ]

    # Totals are sums of their own columns
    total_mechanical_gain = sum(r.mechanical_gain for r in cohort_results)
    total_behavioral_loss = sum(r.migration_loss for r in cohort_results)
    net_revenue_change = total_mechanical_gain - total_behavioral_loss
    baseline_revenue = sum(c.baseline_liability for c in cohorts)

    offset = compute_middle_income_offset(
        net_revenue_change,
        model_input.middle_income_min,
        model_input.middle_income_max,
        cohorts,
    )

    logger.debug(
        f"Model run ({model_input.behavioral.model.value}, {model_input.time_horizon}y): "
        f"mechanical ${total_mechanical_gain / 1e9:.2f}B, "
        f"behavioral ${total_behavioral_loss / 1e9:.2f}B, "
        f"net ${net_revenue_change / 1e9:+.2f}B"
    )

    return ModelOutput(
        cohort_results=cohort_results,
        total_mechanical_gain=total_mechanical_gain,
        total_behavioral_loss=total_behavioral_loss,
        net_revenue_change=net_revenue_change,
        baseline_revenue=baseline_revenue,
        middle_income_offset=offset.rate_increase,
        middle_income_offset_per_filer=offset.per_filer,
        middle_income_offset_pct_income=offset.pct_income,
        middle_income_filer_count=offset.filer_count,
        time_horizon=model_input.time_horizon,
    )
