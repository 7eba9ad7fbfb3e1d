"""
Sensitivity analysis tab renderer.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from ...formatting import format_currency, format_percent, format_signed_currency
from ...policies import ModelInput
from ...scenarios import SensitivityResult
from ..charts import build_sensitivity_chart

SWEEP_TITLES = {
    "migration_elasticity": "Migration Elasticity",
    "max_migration_share": "Max Migration Share",
    "threshold_dollars": "Tipping Threshold",
}


def _format_sweep_value(parameter_name: str, value: float) -> str:
    if parameter_name == "threshold_dollars":
        return format_currency(value, compact=True)
    if parameter_name == "max_migration_share":
        return format_percent(value, 0)
    return f"{value:.1f}"


def render_sensitivity_tab(
    st_module: Any,
    model_input: ModelInput,
    sensitivities: dict[str, SensitivityResult],
    baseline_revenue: float,
) -> None:
    """
    Render one table and chart per behavioral parameter sweep.
    """
    st_module.header("🎚️ Sensitivity Analysis")
    policy = model_input.policy
    st_module.caption(
        f"How net revenue changes as key behavioral parameters vary. Current policy: "
        f"{format_percent(policy.surcharge_rate)} surcharge above "
        f"{format_currency(policy.surcharge_threshold, compact=True)}."
    )

    for name, result in sensitivities.items():
        title = SWEEP_TITLES.get(name, name)
        current = getattr(model_input.behavioral, name)
        st_module.subheader(title)

        col_table, col_chart = st_module.columns([1, 1])
        with col_table:
            df = pd.DataFrame({
                "Value": [
                    _format_sweep_value(name, v) + (" (current)" if v == current else "")
                    for v in result.parameter_values
                ],
                "Net Revenue": [format_signed_currency(n) for n in result.net_revenues],
                "Change": [
                    format_percent(n / baseline_revenue if baseline_revenue else 0.0)
                    for n in result.net_revenues
                ],
            })
            st_module.dataframe(df, use_container_width=True, hide_index=True)
            low, high = result.range
            st_module.caption(f"Range: {format_signed_currency(low)} to {format_signed_currency(high)}")
        with col_chart:
            st_module.plotly_chart(build_sensitivity_chart(result, title), use_container_width=True)
