"""
Middle-Income Offset Calculator

When a policy loses revenue on net, computes the uniform rate increase a
middle-income band would have to pay to make the state whole.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .data.cohorts import BASELINE_COHORTS, IncomeCohort


@dataclass
class MiddleIncomeOffset:
    """
    Break-even burden on a middle-income band.

    Rate fields are None when there is no shortfall to cover, or when the band
    has no income to absorb it.

    Attributes:
        rate_increase: Uniform rate increase on band AGI (e.g., 0.004 = 0.4pp)
        per_filer: Additional tax per band filer (dollars)
        pct_income: per_filer as a share of average band income
        filer_count: Filers in the band
    """
    rate_increase: Optional[float]
    per_filer: Optional[float]
    pct_income: Optional[float]
    filer_count: float

    @property
    def has_shortfall(self) -> bool:
        return self.rate_increase is not None


def _overlap_fraction(cohort: IncomeCohort, band_min: float, band_max: float) -> float:
    """Fraction of a cohort's AGI range lying inside [band_min, band_max)."""
    width = cohort.agi_max - cohort.agi_min
    if math.isinf(width):
        # An unbounded cohort only counts in full against an unbounded band
        return 1.0 if math.isinf(band_max) else 0.0
    if width <= 0:
        return 0.0

    overlap = min(cohort.agi_max, band_max) - max(cohort.agi_min, band_min)
    return max(0.0, min(1.0, overlap / width))


def compute_middle_income_offset(net_revenue_change: float,
                                 middle_income_min: float,
                                 middle_income_max: float,
                                 cohorts: Sequence[IncomeCohort] = BASELINE_COHORTS) -> MiddleIncomeOffset:
    """
    Rate increase on a middle-income band needed to close a revenue shortfall.

    With no shortfall, only the (informational) count of filers in cohorts
    lying entirely inside the band is reported. With a shortfall, cohorts that
    overlap the band even partially contribute AGI and filers in proportion to
    the overlap.

    Args:
        net_revenue_change: Net revenue change of the policy (dollars)
        middle_income_min: Lower bound of the band (inclusive)
        middle_income_max: Upper bound of the band (exclusive)
        cohorts: Cohort table

    Returns:
        MiddleIncomeOffset (all-None rate fields for a degenerate band)
    """
    if net_revenue_change >= 0:
        filer_count = sum(
            c.filer_count for c in cohorts
            if c.agi_min >= middle_income_min and c.agi_max <= middle_income_max
        )
        return MiddleIncomeOffset(None, None, None, filer_count)

    shortfall = abs(net_revenue_change)

    prorated_agi = 0.0
    prorated_filers = 0.0
    for cohort in cohorts:
        if not (cohort.agi_min < middle_income_max and cohort.agi_max > middle_income_min):
            continue
        fraction = _overlap_fraction(cohort, middle_income_min, middle_income_max)
        prorated_agi += cohort.total_agi * fraction
        prorated_filers += cohort.filer_count * fraction

    if prorated_agi == 0 or prorated_filers == 0:
        return MiddleIncomeOffset(None, None, None, 0)

    rate_increase = shortfall / prorated_agi
    per_filer = shortfall / prorated_filers
    avg_middle_income = prorated_agi / prorated_filers
    pct_income = per_filer / avg_middle_income

    return MiddleIncomeOffset(rate_increase, per_filer, pct_income, round(prorated_filers))
