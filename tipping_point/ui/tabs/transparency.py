"""
Assumptions and data sources tab renderer.
"""

from __future__ import annotations

from typing import Any, Sequence

from ...app_data import PARAM_METADATA, ParamMeta

INTERPRETATION_GUIDE = """
**What this model CAN do:**
- Show the mechanical revenue from a tax change before behavior changes
- Illustrate how different behavioral assumptions affect net revenue
- Identify the "tipping point" where behavioral losses exceed gains under specific assumptions
- Quantify what middle-income filers would need to pay to offset any shortfall

**What this model CANNOT do:**
- Predict exactly how many people will move
- Account for business relocation effects or corporate tax interactions
- Model general equilibrium effects (housing market, labor market, services)
- Predict revenue with precision; uncertainty is inherent

**Key uncertainties:**
- **Migration elasticity** is the most impactful assumption. Literature estimates range 4-5x.
- **Timing** matters: year 1 and year 5 results differ substantially.
- **Replacement** (new high earners moving in) is unknown but non-zero for NYC.
- Results are most reliable for moderate tax changes (<3pp surcharge).
"""

SOURCE_LINKS = (
    ("IRS SOI Table 2", "https://www.irs.gov/statistics/soi-tax-stats-historic-table-2",
     "Filer counts and AGI by income bracket for New York"),
    ("Citizens Budget Commission", "https://cbcny.org/research/hidden-cost-new-yorks-shrinking-millionaire-share",
     "Revenue concentration analysis"),
    ("NYS Comptroller", "https://www.osc.ny.gov/reports/finance", "Annual financial reports"),
    ("NYC Independent Budget Office", "https://www.ibo.nyc.ny.us/", "NYC PIT analysis"),
    ("IRS Migration Data", "https://www.irs.gov/statistics/soi-tax-stats-migration-data",
     "Year-to-year address changes by income"),
    ("Young et al. (2016)", "https://doi.org/10.1177/0003122416639625",
     "Millionaire Migration and Taxation of the Elite"),
    ("Moretti & Wilson (2017)", "https://doi.org/10.1162/REST_a_00653",
     "Effect of State Taxes on Location of Top Earners"),
)


def _render_param(st_module: Any, param: ParamMeta) -> None:
    tag = "Assumption" if param.source.is_assumption else "Data"
    st_module.markdown(f"**{param.name}** · `{tag}` · default **{param.default_value}**")
    st_module.caption(param.description)
    source = param.source
    source_text = f"[{source.name}]({source.url})" if source.url else source.name
    st_module.markdown(f"Source: {source_text} ({source.year})")
    if source.notes:
        st_module.caption(source.notes)


def render_transparency_tab(st_module: Any, params: Sequence[ParamMeta] = PARAM_METADATA) -> None:
    """
    Render data-backed and assumption-driven parameters with their sources.
    """
    st_module.header("🔍 Transparency")

    st_module.subheader("🟢 Data-Backed Parameters")
    for param in params:
        if not param.source.is_assumption:
            _render_param(st_module, param)

    st_module.subheader("🟡 Assumption-Driven Parameters")
    st_module.caption(
        "These values are not directly observable. Defaults are informed by academic literature "
        "but carry significant uncertainty. Use the sensitivity analysis to understand their impact."
    )
    for param in params:
        if param.source.is_assumption:
            _render_param(st_module, param)

    with st_module.expander("📖 Interpretation Guide", expanded=False):
        st_module.markdown(INTERPRETATION_GUIDE)

    st_module.subheader("📚 Data Sources")
    for name, url, description in SOURCE_LINKS:
        st_module.markdown(f"- [{name}]({url}): {description}")
