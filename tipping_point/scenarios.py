"""
Scenario and Sensitivity Analysis

Re-runs the revenue model under alternative behavioral assumptions, parameter
sweeps, and a sweep of the surcharge rate (the revenue curve), and locates the
tipping point where behavioral losses overtake the mechanical gain.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from scipy.optimize import brentq

from .behavior import BehavioralModelType, BehavioralParams
from .data.cohorts import IncomeCohort
from .model import ModelOutput, run_model
from .policies import ModelInput

logger = logging.getLogger(__name__)


# =============================================================================
# PRESET SCENARIOS
# =============================================================================

@dataclass(frozen=True)
class ScenarioPreset:
    """Named set of behavioral overrides applied on top of a base input."""
    label: str
    overrides: Dict[str, Any] = field(default_factory=dict)


SCENARIO_PRESETS = (
    ScenarioPreset(
        "No behavioral response (static)",
        {"model": BehavioralModelType.NONE},
    ),
    ScenarioPreset(
        "Conservative response (Young & Varner)",
        {
            "model": BehavioralModelType.HYBRID,
            "migration_elasticity": 0.4,
            "max_migration_share": 0.05,
            "threshold_dollars": 200_000,
        },
    ),
    # The base input's own parameters
    ScenarioPreset("Moderate response (default)"),
    ScenarioPreset(
        "Aggressive response (Moretti & Wilson)",
        {
            "model": BehavioralModelType.HYBRID,
            "migration_elasticity": 2.3,
            "max_migration_share": 0.20,
            "threshold_dollars": 50_000,
            "logistic_slope": 30_000,
        },
    ),
)


@dataclass
class ScenarioResult:
    """Model output under one preset."""
    label: str
    overrides: Dict[str, Any]
    output: ModelOutput


def run_scenarios(base_input: ModelInput,
                  cohorts: Optional[Sequence[IncomeCohort]] = None,
                  presets: Sequence[ScenarioPreset] = SCENARIO_PRESETS) -> List[ScenarioResult]:
    """
    Run the same policy under each preset's behavioral assumptions.

    Args:
        base_input: Input whose policy and other parameters are held fixed
        cohorts: Cohort table (defaults to the base input's data year)
        presets: Scenarios to run

    Returns:
        One ScenarioResult per preset, in order
    """
    results = []
    for preset in presets:
        scenario_input = base_input.with_behavioral(**preset.overrides) if preset.overrides else base_input
        results.append(ScenarioResult(
            label=preset.label,
            overrides=dict(preset.overrides),
            output=run_model(scenario_input, cohorts),
        ))
    return results


# =============================================================================
# SENSITIVITY SWEEPS
# =============================================================================

@dataclass
class SensitivityResult:
    """
    Net revenue and migration across a sweep of one behavioral parameter.
    """
    parameter_name: str
    parameter_values: np.ndarray
    net_revenues: np.ndarray
    migration_shares: np.ndarray  # Filer-weighted average migration share

    @property
    def range(self) -> tuple[float, float]:
        return (float(np.min(self.net_revenues)), float(np.max(self.net_revenues)))


DEFAULT_SENSITIVITY_SWEEPS = {
    "migration_elasticity": [0.0, 0.5, 1.0, 1.5, 2.0, 3.0, 4.0],
    "max_migration_share": [0.05, 0.10, 0.15, 0.20, 0.30],
    "threshold_dollars": [25_000, 50_000, 100_000, 200_000, 500_000],
}


def run_sensitivity(base_input: ModelInput,
                    parameter_name: str,
                    values: Sequence[float],
                    cohorts: Optional[Sequence[IncomeCohort]] = None) -> SensitivityResult:
    """
    Sweep one behavioral parameter while holding everything else fixed.

    Raises:
        ValueError: If parameter_name is not a numeric behavioral parameter
    """
    if parameter_name not in BehavioralParams.numeric_fields():
        raise ValueError(
            f"Unknown sensitivity parameter {parameter_name!r}; "
            f"expected one of {list(BehavioralParams.numeric_fields())}"
        )

    net_revenues = []
    migration_shares = []
    for value in values:
        output = run_model(base_input.with_behavioral(**{parameter_name: value}), cohorts)
        net_revenues.append(output.net_revenue_change)
        migration_shares.append(output.weighted_migration_share)

    logger.debug(f"Sensitivity sweep of {parameter_name} over {len(values)} values")

    return SensitivityResult(
        parameter_name=parameter_name,
        parameter_values=np.asarray(values, dtype=float),
        net_revenues=np.asarray(net_revenues, dtype=float),
        migration_shares=np.asarray(migration_shares, dtype=float),
    )


def run_default_sensitivities(base_input: ModelInput,
                              cohorts: Optional[Sequence[IncomeCohort]] = None) -> Dict[str, SensitivityResult]:
    """Run every sweep in DEFAULT_SENSITIVITY_SWEEPS."""
    return {
        name: run_sensitivity(base_input, name, values, cohorts)
        for name, values in DEFAULT_SENSITIVITY_SWEEPS.items()
    }


# =============================================================================
# REVENUE CURVE AND TIPPING POINT
# =============================================================================

@dataclass
class RevenueCurvePoint:
    """Model totals at one surcharge rate."""
    surcharge_rate: float
    mechanical_gain: float
    behavioral_loss: float
    net_revenue: float


def generate_revenue_curve(base_input: ModelInput,
                           max_rate: float = 0.10,
                           steps: int = 50,
                           cohorts: Optional[Sequence[IncomeCohort]] = None) -> List[RevenueCurvePoint]:
    """
    Sweep the NYS surcharge rate from 0 to max_rate in equal steps.

    Returns steps + 1 points, the first at a zero surcharge.
    """
    points = []
    for rate in np.linspace(0.0, max_rate, steps + 1):
        output = run_model(base_input.with_policy(surcharge_rate=float(rate)), cohorts)
        points.append(RevenueCurvePoint(
            surcharge_rate=float(rate),
            mechanical_gain=output.total_mechanical_gain,
            behavioral_loss=output.total_behavioral_loss,
            net_revenue=output.net_revenue_change,
        ))
    return points


def revenue_curve_to_arrays(points: Sequence[RevenueCurvePoint]) -> Dict[str, np.ndarray]:
    """Column arrays of a revenue curve, for plotting."""
    return {
        "surcharge_rate": np.array([p.surcharge_rate for p in points]),
        "mechanical_gain": np.array([p.mechanical_gain for p in points]),
        "behavioral_loss": np.array([p.behavioral_loss for p in points]),
        "net_revenue": np.array([p.net_revenue for p in points]),
    }


def find_tipping_point(points: Sequence[RevenueCurvePoint]) -> Optional[RevenueCurvePoint]:
    """First point with a positive surcharge rate at which net revenue is negative."""
    for point in points:
        if point.surcharge_rate > 0 and point.net_revenue < 0:
            return point
    return None


def find_break_even_rate(base_input: ModelInput,
                         low: float,
                         high: float,
                         cohorts: Optional[Sequence[IncomeCohort]] = None,
                         xtol: float = 1e-7) -> Optional[float]:
    """
    Surcharge rate in [low, high] at which net revenue crosses zero.

    Args:
        base_input: Input whose surcharge rate is varied
        low: Lower end of the search interval
        high: Upper end of the search interval
        cohorts: Cohort table
        xtol: Absolute tolerance on the rate

    Returns:
        The break-even rate, or None when net revenue has the same sign at
        both ends of the interval
    """
    def net_at(rate: float) -> float:
        return run_model(base_input.with_policy(surcharge_rate=rate), cohorts).net_revenue_change

    net_low, net_high = net_at(low), net_at(high)
    if net_low == 0:
        return low
    if net_high == 0:
        return high
    if np.sign(net_low) == np.sign(net_high):
        return None

    rate = brentq(net_at, low, high, xtol=xtol)
    logger.debug(f"Break-even surcharge rate {rate:.4%} in [{low:.4f}, {high:.4f}]")
    return float(rate)
