"""
UI helper utilities for Streamlit app composition.
"""

from .styles import APP_STYLES, apply_app_styles
from .policy_input import render_behavioral_inputs, render_policy_inputs, render_sidebar_inputs
from .controller_utils import run_with_spinner_feedback
from .app_controller import AppResults, calculate_results, run_main_app

__all__ = [
    "APP_STYLES",
    "apply_app_styles",
    "render_policy_inputs",
    "render_behavioral_inputs",
    "render_sidebar_inputs",
    "run_with_spinner_feedback",
    "AppResults",
    "calculate_results",
    "run_main_app",
]
