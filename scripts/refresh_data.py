#!/usr/bin/env python3
"""
Validate baseline cohort data and list where to refresh it from.

Usage:
    python scripts/refresh_data.py [--csv data/ny_income_tax_baseline_2021.csv] [--year 2021]

Without --csv, the embedded table for --year is validated.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tipping_point.brackets import NYC_BRACKETS, NYS_BRACKETS  # noqa: E402
from tipping_point.data import (  # noqa: E402
    CohortValidator,
    get_baseline_stats,
    get_cohorts,
    load_cohorts_csv,
    validate_brackets,
)

logger = logging.getLogger(__name__)

MANUAL_SOURCES = (
    ("IRS SOI State Data (Table 2)",
     "https://www.irs.gov/statistics/soi-tax-stats-historic-table-2",
     "Excel file for the most recent tax year; New York rows; size of AGI, returns, AGI, income tax"),
    ("NYS DTF PIT Statistics",
     "https://www.tax.ny.gov/research/stats/statistics/pit-filers-summary-datasets-702",
     "Summary datasets; NYS personal income tax liability by income range"),
    ("NYC IBO Fiscal Briefs",
     "https://www.ibo.nyc.ny.us/",
     "Revenue forecasts and PIT analysis; NYC liability total and distribution"),
    ("IRS Migration Data",
     "https://www.irs.gov/statistics/soi-tax-stats-migration-data",
     "State-to-state migration flows; New York outflows by income"),
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate NY income tax baseline data")
    parser.add_argument("--csv", type=Path, default=None, help="Cohort CSV in the refresh-data layout")
    parser.add_argument("--year", type=int, default=2021, help="Tax year of the table")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("NY Tax Tipping Point - Data Validation\n")

    if args.csv is not None:
        try:
            cohorts = load_cohorts_csv(args.csv, args.year)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Could not load cohort CSV: {e}")
            return 1
    else:
        try:
            cohorts = get_cohorts(args.year)
        except ValueError as e:
            logger.error(f"No embedded cohort table: {e}")
            return 1

    stats = get_baseline_stats(cohorts)
    print(f"  Rows: {len(cohorts)}")
    print(f"  Total filers: {stats.total_filers / 1e6:.1f}M")
    print(f"  Total AGI: ${stats.total_agi / 1e12:.2f}T")
    print(f"  Total NYS liability: ${stats.total_nys_revenue / 1e9:.1f}B")
    print(f"  Total NYC liability: ${stats.total_nyc_revenue / 1e9:.1f}B")
    print()

    results = CohortValidator.validate_all(cohorts)
    results.append(validate_brackets(NYS_BRACKETS))
    results.append(validate_brackets(NYC_BRACKETS))
    for result in results:
        print(f"  {result}")

    print("\n--- Manual Data Sources ---\n")
    for i, (name, url, notes) in enumerate(MANUAL_SOURCES, start=1):
        print(f"{i}. {name}")
        print(f"   URL: {url}")
        print(f"   {notes}")
        print()

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
