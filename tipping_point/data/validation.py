"""
Validation checks for cohort tables and bracket schedules.

Cross-checks are advisory: failures are reported as ValidationResult objects
and logged as warnings, never raised.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..brackets import TaxBracket
from .cohorts import IncomeCohort

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check."""
    passed: bool
    message: str
    details: Optional[dict] = None

    def __str__(self) -> str:
        status = "✓ PASS" if self.passed else "✗ FAIL"
        return f"{status}: {self.message}"


class CohortValidator:
    """
    Sanity checks for a cohort table before it is used in the model.

    Checks:
    - Expected number of cohorts
    - AGI ranges sorted, contiguous and non-empty
    - Total filers in a reasonable range
    - NYS liability total close to the Comptroller benchmark
    """

    EXPECTED_COHORT_COUNT = 10

    TOTAL_FILERS_MIN = 9_000_000
    TOTAL_FILERS_MAX = 12_000_000

    # NYS Comptroller FY2022 PIT collections
    EXPECTED_NYS_TOTAL = 59.5e9
    NYS_TOTAL_TOLERANCE = 0.20

    @staticmethod
    def validate_cohort_count(cohorts: Sequence[IncomeCohort]) -> ValidationResult:
        count = len(cohorts)
        if count != CohortValidator.EXPECTED_COHORT_COUNT:
            return ValidationResult(
                passed=False,
                message=f"Expected {CohortValidator.EXPECTED_COHORT_COUNT} cohorts, found {count}",
            )
        return ValidationResult(passed=True, message=f"{count} cohorts present")

    @staticmethod
    def validate_ranges(cohorts: Sequence[IncomeCohort]) -> ValidationResult:
        """AGI ranges must be non-empty, ascending and contiguous."""
        issues = []
        for cohort in cohorts:
            if not cohort.agi_min < cohort.agi_max:
                issues.append(f"{cohort.label}: empty AGI range")

        for prev, cur in zip(cohorts, cohorts[1:]):
            if cur.agi_min != prev.agi_max:
                issues.append(
                    f"Gap or overlap between {prev.label} (max {prev.agi_max:,.0f}) "
                    f"and {cur.label} (min {cur.agi_min:,.0f})"
                )

        if cohorts and not math.isinf(cohorts[-1].agi_max):
            issues.append(f"Top cohort {cohorts[-1].label} is bounded")

        if issues:
            return ValidationResult(
                passed=False,
                message="Cohort AGI ranges are not contiguous",
                details={"issues": issues},
            )
        return ValidationResult(passed=True, message="Cohort AGI ranges are contiguous")

    @staticmethod
    def validate_filer_total(cohorts: Sequence[IncomeCohort]) -> ValidationResult:
        total = sum(c.filer_count for c in cohorts)
        low, high = CohortValidator.TOTAL_FILERS_MIN, CohortValidator.TOTAL_FILERS_MAX
        if not low <= total <= high:
            return ValidationResult(
                passed=False,
                message=f"Total filers {total:,.0f} outside expected range [{low:,.0f}, {high:,.0f}]",
                details={"total_filers": total},
            )
        return ValidationResult(
            passed=True,
            message=f"Total filers {total / 1e6:.1f}M within expected range",
        )

    @staticmethod
    def validate_nys_benchmark(cohorts: Sequence[IncomeCohort],
                               expected_total: float = EXPECTED_NYS_TOTAL,
                               tolerance: float = NYS_TOTAL_TOLERANCE) -> ValidationResult:
        """Compare total NYS liability with the Comptroller's reported collections."""
        total = sum(c.nys_liability for c in cohorts)
        pct_diff = abs(total - expected_total) / expected_total
        details = {"total_nys_liability": total, "expected": expected_total, "pct_diff": pct_diff}

        if pct_diff > tolerance:
            return ValidationResult(
                passed=False,
                message=(f"NYS total ${total / 1e9:.1f}B differs from expected "
                         f"${expected_total / 1e9:.1f}B by {pct_diff * 100:.0f}%"),
                details=details,
            )
        return ValidationResult(
            passed=True,
            message=(f"NYS total ${total / 1e9:.1f}B within {tolerance * 100:.0f}% "
                     f"of ${expected_total / 1e9:.1f}B"),
            details=details,
        )

    @staticmethod
    def validate_all(cohorts: Sequence[IncomeCohort]) -> List[ValidationResult]:
        """Run every cohort check and log failures."""
        results = [
            CohortValidator.validate_cohort_count(cohorts),
            CohortValidator.validate_ranges(cohorts),
            CohortValidator.validate_filer_total(cohorts),
            CohortValidator.validate_nys_benchmark(cohorts),
        ]
        for result in results:
            if not result.passed:
                logger.warning(str(result))
        return results


def validate_brackets(brackets: Sequence[TaxBracket]) -> ValidationResult:
    """Brackets must start at zero, be contiguous, ascending and end unbounded."""
    issues = []
    if not brackets:
        return ValidationResult(passed=False, message="Bracket schedule is empty")

    if brackets[0].min != 0:
        issues.append(f"First bracket starts at {brackets[0].min:,.0f}, not 0")

    for prev, cur in zip(brackets, brackets[1:]):
        if cur.min != prev.max:
            issues.append(f"Bracket starting at {cur.min:,.0f} does not follow {prev.max:,.0f}")
    for bracket in brackets:
        if not bracket.min < bracket.max:
            issues.append(f"Bracket starting at {bracket.min:,.0f} is empty")
        if bracket.rate < 0:
            issues.append(f"Bracket starting at {bracket.min:,.0f} has a negative rate")

    if not math.isinf(brackets[-1].max):
        issues.append("Top bracket is bounded")

    if issues:
        logger.warning(f"Bracket schedule failed validation: {issues}")
        return ValidationResult(
            passed=False,
            message="Bracket schedule is malformed",
            details={"issues": issues},
        )
    return ValidationResult(passed=True, message=f"{len(brackets)} brackets are contiguous")
