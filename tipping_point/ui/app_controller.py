"""
Top-level Streamlit app orchestration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..data.cohorts import BaselineStats, IncomeCohort, get_baseline_stats, get_cohorts
from ..formatting import format_currency, format_number
from ..model import ModelOutput, run_model
from ..policies import ModelInput
from ..scenarios import (
    RevenueCurvePoint,
    ScenarioResult,
    SensitivityResult,
    generate_revenue_curve,
    run_default_sensitivities,
    run_scenarios,
)
from .controller_utils import run_with_spinner_feedback
from .policy_input import render_sidebar_inputs
from .styles import apply_app_styles
from .tabs import (
    render_results_tab,
    render_scenarios_tab,
    render_sensitivity_tab,
    render_transparency_tab,
)

logger = logging.getLogger(__name__)


@dataclass
class AppResults:
    """Everything the tabs render for one set of inputs."""
    model_input: ModelInput
    cohorts: Sequence[IncomeCohort]
    output: ModelOutput
    revenue_curve: list[RevenueCurvePoint]
    scenarios: list[ScenarioResult]
    sensitivities: dict[str, SensitivityResult]
    baseline_stats: BaselineStats


def calculate_results(model_input: ModelInput) -> AppResults:
    """
    Run the model, revenue curve, scenarios and sensitivity sweeps.
    """
    cohorts = get_cohorts(model_input.data_year)
    output = run_model(model_input, cohorts)
    logger.info(
        f"Recalculated: net {format_currency(output.net_revenue_change, compact=True)} "
        f"({model_input.behavioral.model.value}, {model_input.time_horizon}y)"
    )
    return AppResults(
        model_input=model_input,
        cohorts=cohorts,
        output=output,
        revenue_curve=generate_revenue_curve(model_input, max_rate=0.10, steps=50, cohorts=cohorts),
        scenarios=run_scenarios(model_input, cohorts),
        sensitivities=run_default_sensitivities(model_input, cohorts),
        baseline_stats=get_baseline_stats(cohorts),
    )


def render_header(st_module: Any, model_input: ModelInput) -> None:
    """
    Render the title and data badges.
    """
    stats = get_baseline_stats(get_cohorts(model_input.data_year))
    st_module.markdown('<div class="main-header">🗽 NY Tax Tipping Point Calculator</div>', unsafe_allow_html=True)
    st_module.markdown(
        '<div class="sub-header">Mechanical revenue gain, out-migration loss and net impact '
        'of New York income tax changes</div>',
        unsafe_allow_html=True,
    )
    st_module.markdown(
        f'<span class="data-badge">Data: Tax Year {model_input.data_year} (IRS SOI)</span>'
        f'<span class="data-badge">{format_number(stats.total_filers)} filers</span>'
        f'<span class="data-badge">Baseline: {format_currency(stats.total_revenue, compact=True)} total PIT</span>',
        unsafe_allow_html=True,
    )


def render_footer(st_module: Any) -> None:
    st_module.markdown("---")
    st_module.caption(
        "Estimates are illustrative and highly sensitive to behavioral assumptions. "
        "Sources: IRS SOI, NYS DTF, NYS Comptroller, NYC IBO."
    )


def run_main_app(st_module: Any) -> None:
    """
    Render and orchestrate the full Streamlit app flow.
    """
    apply_app_styles(st_module)

    # Sidebar Inputs
    with st_module.sidebar:
        st_module.header("⚙️ Configuration")
        model_input = render_sidebar_inputs(st_module)

    render_header(st_module, model_input)

    results = run_with_spinner_feedback(
        st_module=st_module,
        spinner_message="Running revenue model...",
        error_prefix="Calculation failed",
        action_fn=lambda: calculate_results(model_input),
    )
    if results is None:
        return

    tab_results, tab_scenarios, tab_sensitivity, tab_transparency = st_module.tabs(
        ["📈 Results", "🔀 Scenarios", "🎚️ Sensitivity", "🔍 Transparency"]
    )
    with tab_results:
        render_results_tab(st_module, results.model_input, results.output, results.revenue_curve)
    with tab_scenarios:
        render_scenarios_tab(st_module, results.scenarios, results.cohorts, results.baseline_stats)
    with tab_sensitivity:
        render_sensitivity_tab(
            st_module, results.model_input, results.sensitivities, results.output.baseline_revenue
        )
    with tab_transparency:
        render_transparency_tab(st_module)

    render_footer(st_module)
