"""
Scenario comparison tab renderer.
"""

from __future__ import annotations

from typing import Any, Sequence

import pandas as pd

from ...app_data import COMPETING_JURISDICTIONS, CONCENTRATION_THRESHOLDS, FEDERAL_TOP_RATE
from ...data.cohorts import BaselineStats, IncomeCohort, revenue_share_above
from ...formatting import format_currency, format_percent, format_signed_currency
from ...scenarios import ScenarioResult
from ..charts import build_concentration_chart, build_scenario_chart


def render_scenarios_tab(
    st_module: Any,
    scenario_results: Sequence[ScenarioResult],
    cohorts: Sequence[IncomeCohort],
    baseline_stats: BaselineStats,
) -> None:
    """
    Render behavioral scenarios, revenue concentration and competing rates.
    """
    st_module.header("🔀 Scenario Comparison")
    st_module.caption("Same policy change modeled with different behavioral assumptions.")

    scenario_df = pd.DataFrame({
        "Scenario": [s.label for s in scenario_results],
        "Mechanical Gain": [format_currency(s.output.total_mechanical_gain, compact=True) for s in scenario_results],
        "Behavioral Loss": [format_currency(-s.output.total_behavioral_loss, compact=True) for s in scenario_results],
        "Net Change": [format_signed_currency(s.output.net_revenue_change) for s in scenario_results],
    })
    st_module.dataframe(scenario_df, use_container_width=True, hide_index=True)
    st_module.plotly_chart(build_scenario_chart(scenario_results), use_container_width=True)

    st_module.markdown("---")
    st_module.subheader("💰 Revenue Concentration")
    st_module.caption("Share of total NYS + NYC income tax revenue paid by each income group.")

    col_shares, col_curve = st_module.columns([1, 2])
    with col_shares:
        for label, threshold in CONCENTRATION_THRESHOLDS.items():
            share = revenue_share_above(threshold, cohorts)
            st_module.progress(min(1.0, share), text=f"{label}: {format_percent(share, 0)}")
    with col_curve:
        st_module.plotly_chart(build_concentration_chart(baseline_stats), use_container_width=True)

    st_module.markdown("---")
    st_module.subheader("🗺️ Combined Top Marginal Rates: Competing Jurisdictions")
    jurisdictions_df = pd.DataFrame({
        "Jurisdiction": list(COMPETING_JURISDICTIONS.keys()),
        "State/Local": [format_percent(r, 2) for r in COMPETING_JURISDICTIONS.values()],
        "With Federal": [format_percent(r + FEDERAL_TOP_RATE, 1) for r in COMPETING_JURISDICTIONS.values()],
    })
    st_module.table(jurisdictions_df)
    st_module.caption(
        "NYS surcharges (10.30%, 10.90%) sunset after 2027. SALT deduction cap: $40,000 (raised from $10,000 in 2025)."
    )
