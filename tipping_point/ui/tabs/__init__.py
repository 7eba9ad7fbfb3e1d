"""
Tab renderer modules for Streamlit app.
"""

from .results import render_results_tab, render_summary_metrics
from .scenarios import render_scenarios_tab
from .sensitivity import render_sensitivity_tab
from .transparency import render_transparency_tab

__all__ = [
    "render_results_tab",
    "render_summary_metrics",
    "render_scenarios_tab",
    "render_sensitivity_tab",
    "render_transparency_tab",
]
