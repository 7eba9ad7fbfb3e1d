"""
Shared utilities for UI controller modules.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def run_with_spinner_feedback(
    st_module: Any,
    spinner_message: str,
    error_prefix: str,
    action_fn: Callable[[], T],
) -> Optional[T]:
    """
    Execute an action under a spinner, showing the traceback on failure.

    Returns the action's result, or None when it raised.
    """
    with st_module.spinner(spinner_message):
        try:
            return action_fn()
        except Exception as e:
            st_module.error(f"{error_prefix}: {e}")
            import traceback

            st_module.code(traceback.format_exc())
            return None
