"""
Application data for the Tipping Point Calculator.

Contains:
- PARAM_METADATA: Value, provenance and meaning of each model input
- Option tables for the policy and projection inputs
- COMPETING_JURISDICTIONS: Combined top marginal rates for comparison
"""

from dataclasses import dataclass
from typing import Union

from .brackets import NYC_BRACKETS, NYS_BRACKETS, top_marginal_rate
from .data.cohorts import DataSource


@dataclass(frozen=True)
class ParamMeta:
    """Transparency-panel entry for one model input."""
    name: str
    default_value: Union[float, str]
    source: DataSource
    description: str
    unit: str


_ASSUMPTION = "Assumption"

PARAM_METADATA = (
    ParamMeta(
        name="Baseline Filer Distribution",
        default_value="10.4M total filers",
        source=DataSource(
            name="IRS SOI Table 2 + NYS DTF",
            url="https://www.irs.gov/statistics/soi-tax-stats-historic-table-2",
            year=2021,
            is_assumption=False,
        ),
        description="Number of individual income tax returns filed in New York State by income bracket.",
        unit="filers",
    ),
    ParamMeta(
        name="NYS PIT Revenue",
        default_value="$59.5B total",
        source=DataSource(
            name="NYS Comptroller Annual Report",
            url="https://www.osc.ny.gov/reports/finance",
            year=2022,
            is_assumption=False,
        ),
        description="Total NYS personal income tax collections.",
        unit="dollars",
    ),
    ParamMeta(
        name="NYC PIT Revenue",
        default_value="$15.5B total",
        source=DataSource(
            name="NYC IBO Fiscal Brief",
            url="https://www.ibo.nyc.ny.us/",
            year=2022,
            is_assumption=False,
        ),
        description="Total NYC personal income tax collections.",
        unit="dollars",
    ),
    ParamMeta(
        name="Base Migration Rate",
        default_value="2.5%/year",
        source=DataSource(
            name="IRS SOI Migration Data",
            url="https://www.irs.gov/statistics/soi-tax-stats-migration-data",
            year=2021,
            is_assumption=False,
            notes="Post-TCJA background rate of high-income out-migration from NY",
        ),
        description="Annual baseline rate at which high-income filers leave NY, independent of tax changes.",
        unit="fraction",
    ),
    ParamMeta(
        name="Migration Elasticity",
        default_value="1.0",
        source=DataSource(
            name="Academic literature (Young 2016, Moretti & Wilson 2017)",
            url="https://doi.org/10.1177/0003122416639625",
            year=2016,
            is_assumption=True,
            notes="Literature range: 0.4 (Young) to 2.3 (Moretti & Wilson).",
        ),
        description="Responsiveness of migration to the added burden relative to income. Higher = more migration.",
        unit="elasticity",
    ),
    ParamMeta(
        name="Max Migration Share",
        default_value="12%",
        source=DataSource(
            name=_ASSUMPTION,
            url="",
            year=2024,
            is_assumption=True,
            notes="Cap on cumulative departure. No empirical basis for exact value.",
        ),
        description="Maximum fraction of a cohort that would leave over the projection period.",
        unit="fraction",
    ),
    ParamMeta(
        name="Tipping Threshold",
        default_value="$100,000",
        source=DataSource(
            name=_ASSUMPTION,
            url="",
            year=2024,
            is_assumption=True,
            notes="Point at which migration response accelerates. Informed by cost-of-moving analysis.",
        ),
        description="Additional annual tax burden at which migration probability increases sharply.",
        unit="dollars",
    ),
    ParamMeta(
        name="NYC Resident Share",
        default_value="42-60% by bracket",
        source=DataSource(
            name="Census ACS + IRS SOI",
            url="https://www.census.gov/programs-surveys/acs",
            year=2021,
            is_assumption=True,
            notes="NYC is ~42% of state population but a higher share of high-income filers.",
        ),
        description="Fraction of NYS filers in each bracket who are NYC residents.",
        unit="fraction",
    ),
    ParamMeta(
        name="Migration Timing",
        default_value="30% yr1 / 70% yr3 / 100% yr5",
        source=DataSource(
            name="Assumption based on Young et al. lag analysis",
            url="https://doi.org/10.1177/0003122416639625",
            year=2016,
            is_assumption=True,
        ),
        description="Cumulative share of total migration that occurs by each time horizon.",
        unit="fraction",
    ),
    ParamMeta(
        name="Replacement Rate",
        default_value="0%",
        source=DataSource(
            name="Assumption (conservative)",
            url="",
            year=2024,
            is_assumption=True,
            notes="Some new high earners always move to NY. Default 0% overstates loss.",
        ),
        description="Fraction of departing high earners replaced by new arrivals.",
        unit="fraction",
    ),
)


# =============================================================================
# INPUT OPTIONS
# =============================================================================

SURCHARGE_THRESHOLD_OPTIONS = {
    "$500K": 500_000,
    "$1M": 1_000_000,
    "$2M": 2_000_000,
    "$5M": 5_000_000,
    "$10M": 10_000_000,
    "$25M": 25_000_000,
}

NYC_SURCHARGE_THRESHOLD_OPTIONS = {
    "$500K": 500_000,
    "$1M": 1_000_000,
    "$5M": 5_000_000,
}

MIDDLE_INCOME_BANDS = {
    "$50K–$150K": (50_000, 150_000),
    "$75K–$200K": (75_000, 200_000),
    "$100K–$250K": (100_000, 250_000),
}

BEHAVIORAL_MODEL_LABELS = {
    "none": "No migration (static)",
    "elasticity": "Elasticity model",
    "threshold": "Threshold/tipping model",
    "hybrid": "Hybrid logistic (recommended)",
}

CONCENTRATION_THRESHOLDS = {
    "$1M+": 1_000_000,
    "$500K+": 500_000,
    "$200K+": 200_000,
    "$100K+": 100_000,
}

FEDERAL_TOP_RATE = 0.37

# Top state + local marginal rates of jurisdictions NY filers move to
COMPETING_JURISDICTIONS = {
    "NYC (NYS+NYC)": top_marginal_rate(NYS_BRACKETS) + top_marginal_rate(NYC_BRACKETS),
    "California": 0.133,
    "New Jersey": 0.1075,
    "Connecticut": 0.0699,
    "Florida / Texas": 0.0,
}
