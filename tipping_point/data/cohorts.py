"""
Baseline income cohorts for New York personal income tax.

Sources: IRS SOI Table 2 (New York), NYS DTF PIT statistics, NYC IBO.

Total NYS PIT: ~$59.5B (NYS Comptroller FY2022)
Total NYC PIT: ~$15.5B (NYC IBO FY2022)
Total filers: ~10.4M
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSource:
    """Provenance of a data point or parameter."""
    name: str
    url: str
    year: int
    is_assumption: bool
    notes: Optional[str] = None


@dataclass(frozen=True)
class IncomeCohort:
    """
    Filers within one AGI range, treated as a unit with averaged figures.

    All dollar amounts are in dollars (not billions).

    Attributes:
        label: Display label (e.g., "$200K–$500K")
        agi_min: Lower bound of the AGI range (inclusive)
        agi_max: Upper bound (exclusive; math.inf for the top cohort)
        filer_count: Number of returns in the cohort
        total_agi: Total AGI of all filers in the cohort
        nys_liability: Total NYS income tax liability
        nyc_liability: Total NYC income tax liability
        nyc_resident_share: Fraction of filers who are NYC residents (0-1)
        source: Where the figures come from
    """
    label: str
    agi_min: float
    agi_max: float
    filer_count: float
    total_agi: float
    nys_liability: float
    nyc_liability: float
    nyc_resident_share: float
    source: Optional[DataSource] = None

    def __post_init__(self):
        if self.filer_count <= 0:
            raise ValueError(f"Cohort {self.label!r}: filer_count must be positive")
        if self.total_agi <= 0:
            raise ValueError(f"Cohort {self.label!r}: total_agi must be positive")
        if not 0.0 <= self.nyc_resident_share <= 1.0:
            raise ValueError(
                f"Cohort {self.label!r}: nyc_resident_share must be between 0 and 1"
            )

    @property
    def avg_agi(self) -> float:
        """Average AGI per filer (dollars)."""
        return self.total_agi / self.filer_count

    @property
    def baseline_liability(self) -> float:
        """Combined NYS + NYC liability (dollars)."""
        return self.nys_liability + self.nyc_liability

    @property
    def existing_tax_per_filer(self) -> float:
        """Combined NYS + NYC liability per filer (dollars)."""
        return self.baseline_liability / self.filer_count

    def __str__(self) -> str:
        return (f"{self.label}: {self.filer_count / 1e6:.2f}M filers, "
                f"avg AGI ${self.avg_agi:,.0f}")


_SOI_DTF_2021 = DataSource(
    name="IRS SOI + NYS DTF",
    url="https://www.tax.ny.gov/research/stats/statistics/pit-filers-summary-datasets-702",
    year=2021,
    is_assumption=False,
)

BASELINE_COHORTS_2021: Tuple[IncomeCohort, ...] = (
    IncomeCohort("Under $25K", 0, 25_000, 3_842_000, 42_750_000_000,
                 285_000_000, 95_000_000, 0.42, _SOI_DTF_2021),
    IncomeCohort("$25K–$50K", 25_000, 50_000, 2_156_000, 78_400_000_000,
                 1_410_000_000, 470_000_000, 0.42, _SOI_DTF_2021),
    IncomeCohort("$50K–$75K", 50_000, 75_000, 1_287_000, 80_100_000_000,
                 2_080_000_000, 580_000_000, 0.42, _SOI_DTF_2021),
    IncomeCohort("$75K–$100K", 75_000, 100_000, 856_000, 74_100_000_000,
                 2_370_000_000, 630_000_000, 0.43, _SOI_DTF_2021),
    IncomeCohort("$100K–$200K", 100_000, 200_000, 1_423_000, 199_600_000_000,
                 7_680_000_000, 2_180_000_000, 0.44, _SOI_DTF_2021),
    IncomeCohort("$200K–$500K", 200_000, 500_000, 612_000, 182_400_000_000,
                 9_950_000_000, 3_020_000_000, 0.48, _SOI_DTF_2021),
    IncomeCohort("$500K–$1M", 500_000, 1_000_000, 148_000, 102_600_000_000,
                 6_430_000_000, 1_980_000_000, 0.52, _SOI_DTF_2021),
    IncomeCohort("$1M–$5M", 1_000_000, 5_000_000, 82_000, 155_200_000_000,
                 11_200_000_000, 3_580_000_000, 0.55, _SOI_DTF_2021),
    IncomeCohort("$5M–$25M", 5_000_000, 25_000_000, 11_800, 107_800_000_000,
                 8_420_000_000, 2_760_000_000, 0.58, _SOI_DTF_2021),
    IncomeCohort("Over $25M", 25_000_000, math.inf, 3_200, 197_600_000_000,
                 16_150_000_000, 5_200_000_000, 0.60,
                 DataSource(
                     name="IRS SOI + NYS DTF",
                     url="https://www.tax.ny.gov/research/stats/statistics/pit-filers-summary-datasets-702",
                     year=2021,
                     is_assumption=False,
                     notes="~3,200 filers account for ~$198B AGI. Top 1% pays ~40% of NYS PIT.",
                 )),
)

# Embedded vintages by tax year
DATASETS: Dict[int, Tuple[IncomeCohort, ...]] = {
    2021: BASELINE_COHORTS_2021,
}

DEFAULT_DATA_YEAR = 2021
BASELINE_COHORTS = DATASETS[DEFAULT_DATA_YEAR]


def get_data_years_available() -> List[int]:
    """Tax years with an embedded cohort table."""
    return sorted(DATASETS)


def get_cohorts(data_year: Optional[int] = None) -> Tuple[IncomeCohort, ...]:
    """
    Return the embedded cohort table for a tax year.

    Args:
        data_year: Tax year; None selects DEFAULT_DATA_YEAR

    Raises:
        ValueError: If no table is embedded for the year
    """
    year = DEFAULT_DATA_YEAR if data_year is None else data_year
    if year not in DATASETS:
        raise ValueError(
            f"No cohort data for tax year {year}. "
            f"Available years: {get_data_years_available()}"
        )
    return DATASETS[year]


# Columns of the refresh-data CSV layout. Dollar totals are in millions.
CSV_COLUMNS = [
    "label",
    "agi_min",
    "agi_max",
    "filer_count",
    "total_agi_millions",
    "nys_liability_millions",
    "nyc_liability_millions",
    "nyc_resident_share",
]


def load_cohorts_csv(path: Union[str, Path], year: int,
                     source_name: str = "IRS SOI + NYS DTF") -> Tuple[IncomeCohort, ...]:
    """
    Load a cohort table from a CSV file in the refresh-data layout.

    The top cohort may leave agi_max blank (or write "inf") to mark it
    unbounded.

    Args:
        path: CSV file path
        year: Tax year the table describes
        source_name: Provenance label attached to each cohort

    Returns:
        Cohorts sorted by agi_min

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If required columns are missing or a row breaks a
                    cohort invariant
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Cohort CSV not found at {file_path}")

    logger.info(f"Loading {year} cohort table from {file_path}")
    df = pd.read_csv(file_path)

    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Cohort CSV {file_path.name} is missing columns: {missing}")

    df["agi_max"] = pd.to_numeric(df["agi_max"], errors="coerce").fillna(math.inf)
    df = df.sort_values("agi_min")

    source = DataSource(name=source_name, url=str(file_path), year=year, is_assumption=False)
    cohorts = tuple(
        IncomeCohort(
            label=str(row.label),
            agi_min=float(row.agi_min),
            agi_max=float(row.agi_max),
            filer_count=float(row.filer_count),
            total_agi=float(row.total_agi_millions) * 1e6,
            nys_liability=float(row.nys_liability_millions) * 1e6,
            nyc_liability=float(row.nyc_liability_millions) * 1e6,
            nyc_resident_share=float(row.nyc_resident_share),
            source=source,
        )
        for row in df.itertuples(index=False)
    )

    logger.info(f"Loaded {len(cohorts)} cohorts for {year}")
    return cohorts


@dataclass
class BaselineStats:
    """Summary statistics for a cohort table."""
    total_filers: float
    total_agi: float
    total_nys_revenue: float
    total_nyc_revenue: float
    total_revenue: float
    concentration: pd.DataFrame


def get_baseline_stats(cohorts: Sequence[IncomeCohort] = BASELINE_COHORTS) -> BaselineStats:
    """
    Totals and the revenue concentration curve for a cohort table.

    The concentration frame is ordered from the top cohort down, with
    cumulative filer and revenue shares.
    """
    total_filers = sum(c.filer_count for c in cohorts)
    total_agi = sum(c.total_agi for c in cohorts)
    total_nys = sum(c.nys_liability for c in cohorts)
    total_nyc = sum(c.nyc_liability for c in cohorts)
    total_revenue = total_nys + total_nyc

    ordered = sorted(cohorts, key=lambda c: c.agi_min, reverse=True)
    concentration = pd.DataFrame({
        "label": [c.label for c in ordered],
        "filers": [c.filer_count for c in ordered],
        "revenue": [c.baseline_liability for c in ordered],
    })
    concentration["filer_pct_cumulative"] = concentration["filers"].cumsum() / total_filers
    concentration["revenue_pct_cumulative"] = concentration["revenue"].cumsum() / total_revenue

    return BaselineStats(
        total_filers=total_filers,
        total_agi=total_agi,
        total_nys_revenue=total_nys,
        total_nyc_revenue=total_nyc,
        total_revenue=total_revenue,
        concentration=concentration,
    )


def revenue_share_above(threshold: float,
                        cohorts: Sequence[IncomeCohort] = BASELINE_COHORTS) -> float:
    """Share of combined NYS + NYC revenue paid by cohorts starting at or above threshold."""
    total_revenue = sum(c.baseline_liability for c in cohorts)
    if total_revenue == 0:
        return 0.0
    above = sum(c.baseline_liability for c in cohorts if c.agi_min >= threshold)
    return above / total_revenue
