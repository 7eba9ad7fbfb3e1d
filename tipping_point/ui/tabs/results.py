"""
Results tab renderer.
"""

from __future__ import annotations

from typing import Any, Sequence

import pandas as pd

from ...formatting import format_currency, format_number, format_percent, format_signed_currency
from ...model import ModelOutput
from ...policies import ModelInput
from ...reporting import (
    TippingPointReport,
    export_assumptions_json,
    export_results_csv,
    results_to_dataframe,
)
from ...scenarios import RevenueCurvePoint, find_tipping_point
from ..charts import (
    build_cohort_impact_chart,
    build_migration_chart,
    build_revenue_curve_chart,
    build_waterfall_chart,
)


def render_summary_metrics(st_module: Any, output: ModelOutput) -> None:
    """
    Render the four headline figures.
    """
    col1, col2, col3, col4 = st_module.columns(4)
    with col1:
        st_module.metric(
            "Mechanical Gain",
            format_currency(output.total_mechanical_gain, compact=True),
            help="Before behavioral response",
        )
    with col2:
        st_module.metric(
            "Behavioral Loss",
            format_currency(-output.total_behavioral_loss, compact=True),
            help="From migration",
        )
    with col3:
        st_module.metric(
            "Net Revenue Change",
            format_signed_currency(output.net_revenue_change),
            delta=f"{format_percent(output.net_change_pct_of_baseline, 2)} of baseline",
            delta_color="normal" if output.is_revenue_positive else "inverse",
        )
    with col4:
        if output.middle_income_offset_per_filer is not None:
            st_module.metric(
                "Middle-Class Offset",
                f"{format_currency(output.middle_income_offset_per_filer)}/filer",
                help=(f"+{format_percent(output.middle_income_offset, 2)} rate increase on "
                      f"{format_number(output.middle_income_filer_count)} filers"),
            )
        else:
            st_module.metric("Middle-Class Offset", "N/A (surplus)", help="No revenue shortfall")


def render_results_tab(
    st_module: Any,
    model_input: ModelInput,
    output: ModelOutput,
    revenue_curve: Sequence[RevenueCurvePoint],
) -> None:
    """
    Render headline metrics, charts, the cohort table and exports.
    """
    st_module.header("📈 Results")
    render_summary_metrics(st_module, output)

    st_module.markdown("---")
    col_waterfall, col_curve = st_module.columns(2)
    with col_waterfall:
        st_module.plotly_chart(build_waterfall_chart(output), use_container_width=True)
    with col_curve:
        st_module.plotly_chart(
            build_revenue_curve_chart(revenue_curve, model_input.policy.surcharge_rate),
            use_container_width=True,
        )

    tipping = find_tipping_point(revenue_curve)
    if tipping is not None:
        st_module.warning(
            f"Net revenue turns negative at a {format_percent(tipping.surcharge_rate, 1)} surcharge "
            f"({format_signed_currency(tipping.net_revenue)})."
        )
    else:
        st_module.success("Net revenue stays non-negative across surcharge rates up to 10%.")

    col_migration, col_cohort = st_module.columns(2)
    with col_migration:
        st_module.plotly_chart(build_migration_chart(output), use_container_width=True)
    with col_cohort:
        st_module.plotly_chart(build_cohort_impact_chart(output), use_container_width=True)

    st_module.subheader("📋 Cohort Detail")
    df = results_to_dataframe(output)
    display_df = pd.DataFrame({
        "Cohort": df["Cohort"],
        "Filers": df["Filers"].map(format_number),
        "Avg AGI": df["Avg AGI"].map(format_currency),
        "Additional Tax/Filer": df["Additional Tax/Filer"].map(format_currency),
        "Mechanical Gain": df["Mechanical Gain"].map(lambda v: format_currency(v, compact=True)),
        "Migration": df["Migration Share"].map(lambda v: format_percent(v, 2)),
        "Migration Loss": df["Migration Loss"].map(lambda v: format_currency(v, compact=True)),
        "Net Change": df["Net Revenue Change"].map(format_signed_currency),
    })
    st_module.dataframe(display_df, use_container_width=True, hide_index=True)

    st_module.subheader("📝 Plain English Summary")
    report = TippingPointReport(output, model_input, revenue_curve)
    st_module.markdown("\n\n".join(report.plain_english_summary()))

    st_module.markdown("---")
    st_module.subheader("📥 Export")
    col_csv, col_json = st_module.columns(2)
    with col_csv:
        st_module.download_button(
            "Results CSV",
            data=export_results_csv(output, model_input),
            file_name="ny_tax_results.csv",
            mime="text/csv",
        )
    with col_json:
        st_module.download_button(
            "Assumptions JSON",
            data=export_assumptions_json(model_input),
            file_name="ny_tax_assumptions.json",
            mime="application/json",
        )
