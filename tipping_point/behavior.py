"""
Behavioral Migration Models

Estimates the share of a cohort's filers projected to leave New York in
response to an additional tax burden.

Key references for the default parameters:
- Young et al. (2016) "Millionaire Migration and Taxation of the Elite"
- Kleven et al. (2014) "Migration and Wage Effects of Taxing Top Earners"
- Moretti & Wilson (2017) "The Effect of State Taxes on the Geographical
  Location of Top Earners"
- Varner, Young & Prohofsky (2018) "Millionaire Migration in California"

Only migration is modeled. Income shifting, which the literature finds is
typically a much larger behavioral response, is out of scope.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable, Dict

from scipy.special import expit


class BehavioralModelType(Enum):
    """Functional form of the migration response."""
    NONE = "none"                # Static scoring, no migration
    ELASTICITY = "elasticity"    # Linear in the fractional burden increase
    THRESHOLD = "threshold"      # Flat until a dollar trigger, then a ramp
    HYBRID = "hybrid"            # Logistic S-curve around the trigger


# Fields constrained to [0, 1]
_SHARE_FIELDS = (
    "base_migration_rate",
    "max_migration_share",
    "year1_share",
    "year3_share",
    "year5_share",
    "replacement_rate",
)

# Fields constrained to >= 0
_NON_NEGATIVE_FIELDS = (
    "migration_elasticity",
    "threshold_dollars",
    "logistic_slope",
)


@dataclass(frozen=True)
class BehavioralParams:
    """
    Parameters for the behavioral migration models.

    Attributes:
        model: Which migration curve to apply
        base_migration_rate: Background out-migration share (e.g., 0.025 = 2.5%)
        migration_elasticity: Response per unit of burden/income (elasticity model)
        max_migration_share: Cap on cumulative departure over the window
        threshold_dollars: Additional annual tax that triggers a sharp response
        logistic_slope: Width (dollars) of the hybrid model's S-curve
        year1_share: Share of total migration realized by year 1
        year3_share: Cumulative share realized by year 3
        year5_share: Cumulative share realized by year 5
        replacement_rate: Share of departures offset by new arrivals
    """
    model: BehavioralModelType = BehavioralModelType.HYBRID
    base_migration_rate: float = 0.025
    migration_elasticity: float = 1.0
    max_migration_share: float = 0.12
    threshold_dollars: float = 100_000
    logistic_slope: float = 50_000
    year1_share: float = 0.3
    year3_share: float = 0.7
    year5_share: float = 1.0
    replacement_rate: float = 0.0

    def __post_init__(self):
        if not isinstance(self.model, BehavioralModelType):
            # Accept the string tag ('hybrid', ...) used by exports and the UI
            object.__setattr__(self, "model", BehavioralModelType(self.model))

        for name in _SHARE_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

        for name in _NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        if not self.year1_share <= self.year3_share <= self.year5_share:
            raise ValueError(
                "Migration timing shares must be cumulative: "
                f"year1 ({self.year1_share}) <= year3 ({self.year3_share}) "
                f"<= year5 ({self.year5_share})"
            )

    @classmethod
    def numeric_fields(cls) -> tuple:
        """Names of the parameters that can be swept in sensitivity analysis."""
        return tuple(f.name for f in fields(cls) if f.name != "model")


# Calibrated from the literature. Central-to-high estimates, since only
# migration is captured:
# - Young & Varner (2016): 0.1-0.4 pp out-migration per 1 pp for NJ millionaires
# - Kleven et al. (2014): ~1.5-2.0 for foreign top earners
# - Moretti & Wilson (2017): 1.6-3.0 for star scientists
# - Post-TCJA observed out-migration of $1M+ filers: ~2.5-4.0%/year
DEFAULT_BEHAVIORAL_PARAMS = BehavioralParams()


def get_time_scale(time_horizon: int, params: BehavioralParams) -> float:
    """Cumulative share of the migration response realized by a horizon."""
    if time_horizon == 1:
        return params.year1_share
    if time_horizon == 3:
        return params.year3_share
    if time_horizon == 5:
        return params.year5_share
    return 1.0


def _no_response(additional_tax: float, avg_agi: float, params: BehavioralParams) -> float:
    return 0.0


def _elasticity_share(additional_tax: float, avg_agi: float, params: BehavioralParams) -> float:
    if avg_agi <= 0:
        # Any burden on zero income is unbounded relative to it
        return params.max_migration_share if params.migration_elasticity > 0 else params.base_migration_rate
    # Fractional increase in burden relative to income
    burden_ratio = additional_tax / avg_agi
    return params.base_migration_rate + params.migration_elasticity * burden_ratio


def _threshold_share(additional_tax: float, avg_agi: float, params: BehavioralParams) -> float:
    if additional_tax < params.threshold_dollars:
        return params.base_migration_rate

    if params.threshold_dollars > 0:
        ramp = min(1.0, (additional_tax - params.threshold_dollars) / params.threshold_dollars)
    else:
        ramp = 1.0
    return params.base_migration_rate + (params.max_migration_share - params.base_migration_rate) * ramp


def _hybrid_share(additional_tax: float, avg_agi: float, params: BehavioralParams) -> float:
    if params.logistic_slope > 0:
        sigmoid = float(expit((additional_tax - params.threshold_dollars) / params.logistic_slope))
    else:
        # Zero width collapses the S-curve into a step at the threshold
        if additional_tax == params.threshold_dollars:
            sigmoid = 0.5
        else:
            sigmoid = 1.0 if additional_tax > params.threshold_dollars else 0.0
    return params.base_migration_rate + (params.max_migration_share - params.base_migration_rate) * sigmoid


RawShareFormula = Callable[[float, float, BehavioralParams], float]

MIGRATION_FORMULAS: Dict[BehavioralModelType, RawShareFormula] = {
    BehavioralModelType.NONE: _no_response,
    BehavioralModelType.ELASTICITY: _elasticity_share,
    BehavioralModelType.THRESHOLD: _threshold_share,
    BehavioralModelType.HYBRID: _hybrid_share,
}


def compute_migration_share(additional_tax_per_filer: float,
                            avg_agi: float,
                            params: BehavioralParams,
                            time_horizon: int) -> float:
    """
    Share of a cohort's filers projected to leave because of a tax change.

    A tax cut never produces in-migration: any non-positive burden returns 0.
    The raw curve is scaled by the timing share for the horizon and by the
    replacement offset, then clamped to [0, max_migration_share].

    Args:
        additional_tax_per_filer: Added annual tax per filer (dollars)
        avg_agi: Average AGI of the cohort (dollars)
        params: Behavioral parameters
        time_horizon: Projection horizon in years (1, 3 or 5)

    Returns:
        Migration share between 0 and params.max_migration_share
    """
    if additional_tax_per_filer <= 0 or params.model is BehavioralModelType.NONE:
        return 0.0

    raw_share = MIGRATION_FORMULAS[params.model](additional_tax_per_filer, avg_agi, params)

    time_scale = get_time_scale(time_horizon, params)
    net_share = raw_share * time_scale * (1 - params.replacement_rate)

    return max(0.0, min(params.max_migration_share, net_share))
