"""
Centralized Streamlit style definitions.
"""

APP_STYLES = """
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        color: #1f3a5f;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #666;
        margin-bottom: 1.5rem;
    }
    .data-badge {
        display: inline-block;
        background-color: #e7f3ff;
        color: #1f3a5f;
        padding: 0.1rem 0.5rem;
        border-radius: 0.25rem;
        margin-right: 0.5rem;
        font-size: 0.85rem;
    }
    .summary-box {
        background-color: #eef5ff;
        border-left: 4px solid #1f77b4;
        padding: 1rem;
        margin: 1rem 0;
        border-radius: 0.25rem;
    }
    .assumption-tag {
        color: #b8860b;
        font-weight: bold;
    }
</style>
"""


def apply_app_styles(st_module) -> None:
    """Apply shared CSS style block to the Streamlit app."""
    st_module.markdown(APP_STYLES, unsafe_allow_html=True)
