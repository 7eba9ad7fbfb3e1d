"""
Sidebar input controls for the policy, behavioral and projection settings.
"""

from __future__ import annotations

from typing import Any

from ..app_data import (
    BEHAVIORAL_MODEL_LABELS,
    MIDDLE_INCOME_BANDS,
    NYC_SURCHARGE_THRESHOLD_OPTIONS,
    SURCHARGE_THRESHOLD_OPTIONS,
)
from ..behavior import DEFAULT_BEHAVIORAL_PARAMS, BehavioralModelType, BehavioralParams
from ..data.cohorts import DEFAULT_DATA_YEAR, get_data_years_available
from ..policies import DEFAULT_INPUT, DEFAULT_POLICY, TIME_HORIZONS, ModelInput, PolicyChange


def _option_index(options: dict[str, Any], value: Any) -> int:
    values = list(options.values())
    return values.index(value) if value in values else 0


def render_policy_inputs(st_module: Any) -> PolicyChange:
    """
    Render the tax change controls and return the selected policy.
    """
    st_module.subheader("🏛️ Policy Changes")

    surcharge_pct = st_module.slider(
        "NYS Surcharge Rate (%)",
        min_value=0.0,
        max_value=10.0,
        value=DEFAULT_POLICY.surcharge_rate * 100,
        step=0.1,
        help="Additional rate on income above the surcharge threshold",
    )

    threshold_label = st_module.selectbox(
        "Surcharge Threshold",
        options=list(SURCHARGE_THRESHOLD_OPTIONS.keys()),
        index=_option_index(SURCHARGE_THRESHOLD_OPTIONS, DEFAULT_POLICY.surcharge_threshold),
    )

    flat_change_pct = st_module.slider(
        "Flat Rate Change, all brackets (pp)",
        min_value=-2.0,
        max_value=2.0,
        value=DEFAULT_POLICY.flat_rate_change * 100,
        step=0.1,
        help="Positive = tax increase on all income, Negative = tax cut",
    )

    include_nyc = st_module.checkbox(
        "Include NYC tax changes",
        value=DEFAULT_POLICY.include_nyc,
    )

    nyc_surcharge_pct = DEFAULT_POLICY.nyc_surcharge_rate * 100
    nyc_threshold = DEFAULT_POLICY.nyc_surcharge_threshold
    if include_nyc:
        nyc_surcharge_pct = st_module.slider(
            "NYC Surcharge Rate (%)",
            min_value=0.0,
            max_value=5.0,
            value=nyc_surcharge_pct,
            step=0.1,
            help="Applies only to NYC residents",
        )
        nyc_threshold_label = st_module.selectbox(
            "NYC Surcharge Threshold",
            options=list(NYC_SURCHARGE_THRESHOLD_OPTIONS.keys()),
            index=_option_index(NYC_SURCHARGE_THRESHOLD_OPTIONS, nyc_threshold),
        )
        nyc_threshold = NYC_SURCHARGE_THRESHOLD_OPTIONS[nyc_threshold_label]

    return PolicyChange(
        surcharge_rate=surcharge_pct / 100,
        surcharge_threshold=SURCHARGE_THRESHOLD_OPTIONS[threshold_label],
        flat_rate_change=flat_change_pct / 100,
        include_nyc=include_nyc,
        nyc_surcharge_rate=nyc_surcharge_pct / 100,
        nyc_surcharge_threshold=nyc_threshold,
    )


def render_behavioral_inputs(st_module: Any) -> BehavioralParams:
    """
    Render the migration model controls and return the selected parameters.

    Controls irrelevant to the chosen model keep their defaults.
    """
    st_module.subheader("🧳 Behavioral Response Model")
    defaults = DEFAULT_BEHAVIORAL_PARAMS

    model_values = [m.value for m in BehavioralModelType]
    model_value = st_module.selectbox(
        "Migration Model",
        options=model_values,
        index=model_values.index(defaults.model.value),
        format_func=lambda v: BEHAVIORAL_MODEL_LABELS[v],
    )
    model = BehavioralModelType(model_value)

    if model == BehavioralModelType.NONE:
        return BehavioralParams(model=model)

    migration_elasticity = st_module.slider(
        "Migration Elasticity",
        min_value=0.0,
        max_value=4.0,
        value=defaults.migration_elasticity,
        step=0.1,
        help="Literature range: 0.4–2.3",
    )
    max_share_pct = st_module.slider(
        "Max Migration Share (%)",
        min_value=0,
        max_value=40,
        value=round(defaults.max_migration_share * 100),
        step=1,
        help="Assumption",
    )

    threshold_dollars = defaults.threshold_dollars
    if model in (BehavioralModelType.THRESHOLD, BehavioralModelType.HYBRID):
        threshold_dollars = st_module.slider(
            "Tipping Threshold ($/year)",
            min_value=10_000,
            max_value=500_000,
            value=int(defaults.threshold_dollars),
            step=10_000,
            help="Assumption",
        )

    logistic_slope = defaults.logistic_slope
    if model == BehavioralModelType.HYBRID:
        logistic_slope = st_module.slider(
            "Logistic Slope ($)",
            min_value=10_000,
            max_value=200_000,
            value=int(defaults.logistic_slope),
            step=5_000,
            help="Controls steepness of the S-curve",
        )

    replacement_pct = st_module.slider(
        "Replacement Rate (%)",
        min_value=0,
        max_value=50,
        value=round(defaults.replacement_rate * 100),
        step=5,
        help="New arrivals offsetting departures",
    )

    return BehavioralParams(
        model=model,
        base_migration_rate=defaults.base_migration_rate,
        migration_elasticity=migration_elasticity,
        max_migration_share=max_share_pct / 100,
        threshold_dollars=threshold_dollars,
        logistic_slope=logistic_slope,
        year1_share=defaults.year1_share,
        year3_share=defaults.year3_share,
        year5_share=defaults.year5_share,
        replacement_rate=replacement_pct / 100,
    )


def render_sidebar_inputs(st_module: Any) -> ModelInput:
    """
    Render every input control and assemble the ModelInput for this rerun.
    """
    policy = render_policy_inputs(st_module)

    st_module.markdown("---")
    behavioral = render_behavioral_inputs(st_module)

    st_module.markdown("---")
    st_module.subheader("📅 Projection Settings")

    time_horizon = st_module.selectbox(
        "Time Horizon",
        options=list(TIME_HORIZONS),
        index=TIME_HORIZONS.index(DEFAULT_INPUT.time_horizon),
        format_func=lambda h: f"{h} Year{'s' if h > 1 else ''}",
    )

    default_band = (DEFAULT_INPUT.middle_income_min, DEFAULT_INPUT.middle_income_max)
    band_label = st_module.selectbox(
        "Middle-Income Range (for offset)",
        options=list(MIDDLE_INCOME_BANDS.keys()),
        index=_option_index(MIDDLE_INCOME_BANDS, default_band),
    )
    middle_income_min, middle_income_max = MIDDLE_INCOME_BANDS[band_label]

    years = get_data_years_available()
    data_year = st_module.selectbox(
        "Data Year",
        options=years,
        index=years.index(DEFAULT_DATA_YEAR),
        help="Tax year of the IRS SOI / NYS DTF cohort table",
    )

    return ModelInput(
        policy=policy,
        behavioral=behavioral,
        time_horizon=time_horizon,
        middle_income_min=middle_income_min,
        middle_income_max=middle_income_max,
        data_year=data_year,
    )
