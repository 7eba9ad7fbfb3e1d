"""
NY Tax Tipping Point Calculator

Estimates the mechanical revenue gain, out-migration loss and net revenue
impact of New York personal income tax changes across income cohorts.
"""

from .behavior import BehavioralModelType, BehavioralParams, compute_migration_share
from .brackets import NYC_BRACKETS, NYS_BRACKETS, TaxBracket, compute_surcharge, compute_tax
from .data import BASELINE_COHORTS, IncomeCohort, get_baseline_stats, get_cohorts
from .model import CohortResult, ModelOutput, evaluate_cohort, run_model
from .offset import MiddleIncomeOffset, compute_middle_income_offset
from .policies import DEFAULT_INPUT, ModelInput, PolicyChange, model_input_from_dict
from .reporting import TippingPointReport, export_assumptions_json, export_results_csv
from .scenarios import (
    find_break_even_rate,
    find_tipping_point,
    generate_revenue_curve,
    run_scenarios,
    run_sensitivity,
)

__version__ = "1.0.0"
__all__ = [
    "BehavioralModelType",
    "BehavioralParams",
    "compute_migration_share",
    "TaxBracket",
    "NYS_BRACKETS",
    "NYC_BRACKETS",
    "compute_tax",
    "compute_surcharge",
    "IncomeCohort",
    "BASELINE_COHORTS",
    "get_cohorts",
    "get_baseline_stats",
    "CohortResult",
    "ModelOutput",
    "evaluate_cohort",
    "run_model",
    "MiddleIncomeOffset",
    "compute_middle_income_offset",
    "PolicyChange",
    "ModelInput",
    "DEFAULT_INPUT",
    "model_input_from_dict",
    "TippingPointReport",
    "export_results_csv",
    "export_assumptions_json",
    "run_scenarios",
    "run_sensitivity",
    "generate_revenue_curve",
    "find_tipping_point",
    "find_break_even_rate",
]
