"""
Reporting and Export Module

Turns model output into downloadable CSV/JSON, a plain-text report, and a
Matplotlib revenue-curve plot.
"""

import io
import json
from typing import Any, Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import numpy as np
import pandas as pd

from .formatting import format_currency, format_number, format_percent, format_signed_currency
from .model import ModelOutput
from .policies import ModelInput, model_input_from_dict, model_input_to_dict
from .scenarios import RevenueCurvePoint, find_tipping_point, revenue_curve_to_arrays


# Justification for each behavioral parameter, exported alongside its value
PARAMETER_SOURCES = {
    "model": "Hybrid logistic by default; elasticity and threshold curves available for comparison",
    "base_migration_rate": "IRS SOI migration data for NY high-income filers (~2.5%/year)",
    "migration_elasticity": "Literature range 0.4-2.3; default 1.0 (Young et al., Moretti & Wilson)",
    "max_migration_share": "Assumption: cap at 12% cumulative departure",
    "threshold_dollars": "Assumption: $100K additional annual tax triggers behavioral shift",
    "logistic_slope": "Assumption: controls steepness of response curve",
    "year1_share": "Assumption: 30% of total migration occurs in year 1",
    "year3_share": "Assumption: 70% by year 3",
    "year5_share": "Assumption: fully realized by year 5",
    "replacement_rate": "Assumption: 0% replacement by default (conservative)",
}

DATA_SOURCES = (
    "IRS Statistics of Income (SOI) Table 2 - New York State (TY{year})",
    "Citizens Budget Commission - Revenue Concentration Analysis",
    "NYS Comptroller Annual Financial Reports",
    "NYC Independent Budget Office fiscal analysis",
    "Empire Center - Millionaire Migration Analysis",
)

CSV_HEADER = [
    "Cohort",
    "Filers",
    "Avg AGI",
    "Additional Tax/Filer",
    "Mechanical Gain",
    "Migration %",
    "Migration Loss",
    "Net Revenue Change",
]


def results_to_dataframe(output: ModelOutput) -> pd.DataFrame:
    """Per-cohort results as a DataFrame (dollars, shares as fractions)."""
    return pd.DataFrame({
        "Cohort": [r.cohort.label for r in output.cohort_results],
        "Filers": [r.cohort.filer_count for r in output.cohort_results],
        "Avg AGI": [r.cohort.avg_agi for r in output.cohort_results],
        "Additional Tax/Filer": [r.additional_tax_per_filer for r in output.cohort_results],
        "Mechanical Gain": [r.mechanical_gain for r in output.cohort_results],
        "Migration Share": [r.migration_share for r in output.cohort_results],
        "Migration Loss": [r.migration_loss for r in output.cohort_results],
        "Net Revenue Change": [r.net_revenue_change for r in output.cohort_results],
    })


def export_results_csv(output: ModelOutput, model_input: ModelInput) -> str:
    """
    Results table as CSV text.

    One row per cohort with whole-dollar amounts, followed by a blank line and
    summary rows for the totals and the time horizon.
    """
    df = results_to_dataframe(output)
    export = pd.DataFrame({
        "Cohort": df["Cohort"],
        "Filers": df["Filers"].round().astype(int),
        "Avg AGI": df["Avg AGI"].round().astype(int),
        "Additional Tax/Filer": df["Additional Tax/Filer"].round().astype(int),
        "Mechanical Gain": df["Mechanical Gain"].round().astype(int),
        "Migration %": [f"{share * 100:.2f}%" for share in df["Migration Share"]],
        "Migration Loss": df["Migration Loss"].round().astype(int),
        "Net Revenue Change": df["Net Revenue Change"].round().astype(int),
    }, columns=CSV_HEADER)

    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    # Cohort labels are always quoted; every other field is a plain number or percent
    for label, *values in export.itertuples(index=False):
        quoted_label = '"' + label.replace('"', '""') + '"'
        buffer.write(",".join([quoted_label, *(str(v) for v in values)]) + "\n")

    buffer.write("\n")
    buffer.write(f"Total Mechanical Gain,{round(output.total_mechanical_gain)}\n")
    buffer.write(f"Total Behavioral Loss,{round(output.total_behavioral_loss)}\n")
    buffer.write(f"Net Revenue Change,{round(output.net_revenue_change)}\n")
    buffer.write(f"Time Horizon,{model_input.time_horizon} years")

    return buffer.getvalue()


def export_assumptions_json(model_input: ModelInput) -> str:
    """
    Model input as a JSON document, annotated with parameter sources.

    The result loads back with load_assumptions_json.
    """
    document: Dict[str, Any] = model_input_to_dict(model_input)
    document["behavioral"]["_sources"] = dict(PARAMETER_SOURCES)
    document["data_sources"] = [s.format(year=model_input.data_year) for s in DATA_SOURCES]
    return json.dumps(document, indent=2)


def load_assumptions_json(text: str) -> ModelInput:
    """
    Rebuild a ModelInput from an assumptions JSON document.

    Raises:
        ValueError: For malformed JSON or unknown options
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid assumptions JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Assumptions JSON must be an object")
    return model_input_from_dict(data)


class TippingPointReport:
    """
    Text and chart report for one model run.
    """

    def __init__(self,
                 output: ModelOutput,
                 model_input: ModelInput,
                 revenue_curve: Optional[Sequence[RevenueCurvePoint]] = None):
        self.output = output
        self.model_input = model_input
        self.revenue_curve = list(revenue_curve) if revenue_curve is not None else None

    def _policy_description(self) -> str:
        policy = self.model_input.policy
        if policy.surcharge_rate > 0:
            return (f"a {format_percent(policy.surcharge_rate)} surcharge on income above "
                    f"{format_currency(policy.surcharge_threshold, compact=True)}")
        return "the proposed tax change"

    def plain_english_summary(self) -> List[str]:
        """Paragraphs describing the result in plain language."""
        output = self.output
        model_input = self.model_input
        model = model_input.behavioral.model.value
        model_desc = "no behavioral response" if model == "none" else f"the {model} behavioral model"

        paragraphs = [
            f"Under {self._policy_description()}, the mechanical revenue gain "
            f"(assuming nobody changes behavior) would be "
            f"{format_currency(output.total_mechanical_gain, compact=True)}.",

            f"Using {model_desc} over a {output.time_horizon}-year horizon, an estimated "
            f"{format_currency(output.total_behavioral_loss, compact=True)} would be lost due to "
            f"high-income filers relocating, taking both their existing tax payments and "
            f"the new surcharge with them.",

            f"The net revenue impact is {format_signed_currency(output.net_revenue_change)} "
            f"({format_percent(abs(output.net_change_pct_of_baseline))} of baseline revenue).",
        ]

        if output.middle_income_offset is not None:
            paragraphs.append(
                f"To close this gap, middle-income filers "
                f"({format_currency(model_input.middle_income_min, compact=True)}-"
                f"{format_currency(model_input.middle_income_max, compact=True)}) would need a rate "
                f"increase of {format_percent(output.middle_income_offset, 2)}, costing each of the "
                f"{format_number(output.middle_income_filer_count)} affected filers an additional "
                f"{format_currency(output.middle_income_offset_per_filer)}/year."
            )

        paragraphs.append(
            "These estimates are sensitive to behavioral assumptions. "
            "This model cannot predict whether any specific individual will move."
        )
        return paragraphs

    def generate_text_report(self) -> str:
        """Generate a detailed text report."""
        output = self.output
        lines = []

        # Header
        lines.append("=" * 78)
        lines.append("NY TAX TIPPING POINT REPORT")
        lines.append("=" * 78)
        lines.append("")

        # Policy summary
        policy = self.model_input.policy
        behavioral = self.model_input.behavioral
        lines.append("POLICY")
        lines.append("-" * 40)
        lines.append(f"NYS surcharge:        {format_percent(policy.surcharge_rate, 2)} above "
                     f"{format_currency(policy.surcharge_threshold)}")
        lines.append(f"Flat rate change:     {format_percent(policy.flat_rate_change, 2)}")
        if policy.include_nyc:
            lines.append(f"NYC surcharge:        {format_percent(policy.nyc_surcharge_rate, 2)} above "
                         f"{format_currency(policy.nyc_surcharge_threshold)}")
        lines.append(f"Behavioral model:     {behavioral.model.value}")
        lines.append(f"Time horizon:         {output.time_horizon} years")
        lines.append("")

        # Key metrics
        lines.append("REVENUE IMPACT")
        lines.append("-" * 40)
        lines.append(f"Mechanical gain:      {format_currency(output.total_mechanical_gain, compact=True):>12}")
        lines.append(f"Behavioral loss:      {format_currency(output.total_behavioral_loss, compact=True):>12}")
        lines.append(f"Net revenue change:   {format_signed_currency(output.net_revenue_change):>12}")
        lines.append(f"Share of baseline:    {format_percent(output.net_change_pct_of_baseline, 2):>12}")
        lines.append("")

        # Cohort table
        lines.append("BY COHORT")
        lines.append("-" * 78)
        lines.append(f"{'Cohort':<14} {'Filers':>10} {'Add. Tax':>10} {'Mechanical':>11} "
                     f"{'Migr.':>7} {'Loss':>10} {'Net':>10}")
        lines.append("-" * 78)
        for r in output.cohort_results:
            lines.append(
                f"{r.cohort.label:<14} "
                f"{format_number(r.cohort.filer_count):>10} "
                f"{format_currency(r.additional_tax_per_filer, compact=True):>10} "
                f"{format_currency(r.mechanical_gain, compact=True):>11} "
                f"{format_percent(r.migration_share, 2):>7} "
                f"{format_currency(r.migration_loss, compact=True):>10} "
                f"{format_currency(r.net_revenue_change, compact=True):>10}"
            )
        lines.append("")

        if self.revenue_curve:
            tipping = find_tipping_point(self.revenue_curve)
            lines.append("REVENUE CURVE")
            lines.append("-" * 40)
            best = max(self.revenue_curve, key=lambda p: p.net_revenue)
            lines.append(f"Revenue-maximizing rate: {format_percent(best.surcharge_rate, 2)} "
                         f"({format_signed_currency(best.net_revenue)})")
            if tipping is not None:
                lines.append(f"Net revenue first negative at {format_percent(tipping.surcharge_rate, 2)}")
            else:
                lines.append("Net revenue stays non-negative across the curve")
            lines.append("")

        lines.append("SUMMARY")
        lines.append("-" * 40)
        for paragraph in self.plain_english_summary():
            lines.append(paragraph)
            lines.append("")

        return "\n".join(lines)

    def plot_revenue_curve(self,
                           save_path: Optional[str] = None,
                           show: bool = True) -> plt.Figure:
        """
        Plot mechanical gain, behavioral loss and net revenue against the
        surcharge rate.

        Raises:
            ValueError: If the report was built without a revenue curve
        """
        if not self.revenue_curve:
            raise ValueError("No revenue curve to plot; pass revenue_curve to TippingPointReport")

        arrays = revenue_curve_to_arrays(self.revenue_curve)
        rates_pct = arrays["surcharge_rate"] * 100

        fig, ax = plt.subplots(figsize=(10, 6))
        ax.plot(rates_pct, arrays["mechanical_gain"] / 1e9, 'g--', linewidth=1.5, label='Mechanical gain')
        ax.plot(rates_pct, -arrays["behavioral_loss"] / 1e9, 'r--', linewidth=1.5, label='Behavioral loss')
        ax.plot(rates_pct, arrays["net_revenue"] / 1e9, 'b-', linewidth=2, label='Net revenue')

        current = self.model_input.policy.surcharge_rate * 100
        ax.axvline(x=current, color='gray', linestyle=':', linewidth=1, label='Current policy')
        ax.axhline(y=0, color='black', linestyle='-', linewidth=0.5)

        peak = int(np.argmax(arrays["net_revenue"]))
        ax.scatter([rates_pct[peak]], [arrays["net_revenue"][peak] / 1e9], color='blue', zorder=5)

        ax.set_xlabel('NYS Surcharge Rate (%)')
        ax.set_ylabel('Revenue Change ($ billions)')
        ax.set_title(f'Revenue Curve: {self.output.time_horizon}-Year Horizon',
                     fontsize=14, fontweight='bold')
        ax.yaxis.set_major_formatter(mticker.StrMethodFormatter('${x:,.1f}B'))
        ax.legend(loc='best')
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')

        if show:
            plt.show()

        return fig
