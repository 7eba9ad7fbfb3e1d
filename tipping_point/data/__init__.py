"""
Data layer for tipping_point.

This package provides the embedded New York income cohort tables and
validators for them:
- IRS Statistics of Income (SOI) Table 2 for New York
- NYS DTF personal income tax statistics
- NYC IBO fiscal analysis

Example usage:
    >>> from tipping_point.data import get_cohorts, get_baseline_stats
    >>> cohorts = get_cohorts(2021)
    >>> stats = get_baseline_stats(cohorts)
    >>> stats.total_revenue
"""

from tipping_point.data.cohorts import (
    BASELINE_COHORTS,
    BASELINE_COHORTS_2021,
    DATASETS,
    DEFAULT_DATA_YEAR,
    BaselineStats,
    DataSource,
    IncomeCohort,
    get_baseline_stats,
    get_cohorts,
    get_data_years_available,
    load_cohorts_csv,
    revenue_share_above,
)
from tipping_point.data.validation import CohortValidator, ValidationResult, validate_brackets

__all__ = [
    'BASELINE_COHORTS',
    'BASELINE_COHORTS_2021',
    'DATASETS',
    'DEFAULT_DATA_YEAR',
    'BaselineStats',
    'DataSource',
    'IncomeCohort',
    'get_baseline_stats',
    'get_cohorts',
    'get_data_years_available',
    'load_cohorts_csv',
    'revenue_share_above',
    'CohortValidator',
    'ValidationResult',
    'validate_brackets',
]
