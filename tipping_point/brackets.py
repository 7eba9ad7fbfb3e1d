"""
Tax Bracket and Surcharge Functions

Progressive bracket schedules for New York State and New York City personal
income tax, and the two closed-form liability functions the model is built on.
"""

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class TaxBracket:
    """
    One marginal-rate bracket covering the half-open interval [min, max).

    Attributes:
        min: Lower bound of taxable income (dollars, inclusive)
        max: Upper bound (dollars, exclusive; math.inf for the top bracket)
        rate: Marginal rate applied inside the bracket (e.g., 0.055 = 5.5%)
    """
    min: float
    max: float
    rate: float

    def __str__(self) -> str:
        ceiling_str = "and over" if math.isinf(self.max) else f"- ${self.max:,.0f}"
        return f"${self.min:,.0f} {ceiling_str}: {self.rate * 100:.3f}%"


# =============================================================================
# CURRENT NY RATE SCHEDULES (2024-2027)
# =============================================================================

# NYS single filer schedule, NYS Tax Law § 601.
# Includes the temporary top rates enacted in the 2021 budget.
NYS_BRACKETS = (
    TaxBracket(0, 8_500, 0.04),
    TaxBracket(8_500, 11_700, 0.045),
    TaxBracket(11_700, 13_900, 0.0525),
    TaxBracket(13_900, 80_650, 0.055),
    TaxBracket(80_650, 215_400, 0.06),
    TaxBracket(215_400, 1_077_550, 0.0685),
    TaxBracket(1_077_550, 5_000_000, 0.0965),
    TaxBracket(5_000_000, 25_000_000, 0.103),
    TaxBracket(25_000_000, math.inf, 0.109),
)

# NYC resident schedule, NYC Admin Code § 11-1701.
NYC_BRACKETS = (
    TaxBracket(0, 12_000, 0.03078),
    TaxBracket(12_000, 25_000, 0.03762),
    TaxBracket(25_000, 50_000, 0.03819),
    TaxBracket(50_000, math.inf, 0.03876),
)


def compute_tax(income: float, brackets: Sequence[TaxBracket]) -> float:
    """
    Compute tax liability under a progressive bracket schedule.

    Brackets must be sorted ascending and contiguous. Income at or below
    zero owes nothing.

    Args:
        income: Taxable income (dollars)
        brackets: Ordered bracket schedule

    Returns:
        Total liability in dollars (always >= 0)
    """
    tax = 0.0
    for bracket in brackets:
        if income <= bracket.min:
            break
        taxable_in_bracket = min(income, bracket.max) - bracket.min
        tax += taxable_in_bracket * bracket.rate
    return tax


def compute_surcharge(income: float, rate: float, threshold: float) -> float:
    """Flat-rate add-on applied to income above a threshold."""
    if income <= threshold:
        return 0.0
    return (income - threshold) * rate


def top_marginal_rate(brackets: Sequence[TaxBracket]) -> float:
    """Rate of the highest bracket in a schedule."""
    return brackets[-1].rate if brackets else 0.0
