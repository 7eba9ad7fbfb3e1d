"""
Pytest fixtures for tipping point calculator tests.
"""

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tipping_point.behavior import BehavioralModelType, BehavioralParams
from tipping_point.data.cohorts import BASELINE_COHORTS
from tipping_point.model import run_model
from tipping_point.policies import DEFAULT_INPUT, NOOP_POLICY, ModelInput, PolicyChange


# =============================================================================
# INPUT FIXTURES
# =============================================================================

@pytest.fixture
def default_input():
    """2% NYS surcharge above $1M, hybrid model, 5-year horizon."""
    return DEFAULT_INPUT


@pytest.fixture
def static_input():
    """Default policy with no behavioral response."""
    return DEFAULT_INPUT.with_behavioral(model=BehavioralModelType.NONE)


@pytest.fixture
def shortfall_input():
    """Small surcharge where base migration outweighs the mechanical gain."""
    return DEFAULT_INPUT.with_policy(surcharge_rate=0.002)


@pytest.fixture
def noop_input():
    """Policy that changes no one's tax."""
    return ModelInput(policy=NOOP_POLICY)


@pytest.fixture
def nyc_only_policy():
    """1% NYC surcharge above $1M with no statewide change."""
    return PolicyChange(
        surcharge_rate=0.0,
        include_nyc=True,
        nyc_surcharge_rate=0.01,
        nyc_surcharge_threshold=1_000_000,
    )


@pytest.fixture
def elasticity_params():
    """Linear elasticity model with default calibration."""
    return BehavioralParams(model=BehavioralModelType.ELASTICITY)


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def baseline_cohorts():
    """Embedded TY2021 cohort table."""
    return BASELINE_COHORTS


@pytest.fixture
def default_output(default_input):
    return run_model(default_input)


@pytest.fixture
def shortfall_output(shortfall_input):
    return run_model(shortfall_input)


# =============================================================================
# STREAMLIT FIXTURES
# =============================================================================

class _Context:
    """Stand-in for Streamlit containers used as context managers."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeStreamlit:
    """
    Minimal Streamlit replacement that records calls.

    Input widgets return their default (value= / index=) so renderers build
    the default configuration.
    """

    def __init__(self):
        self.calls = []
        self.sidebar = _Context()
        self.session_state = {}

    def __getattr__(self, name):
        def _record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return None
        return _record

    def called(self, name):
        return [c for c in self.calls if c[0] == name]

    def columns(self, spec, **kwargs):
        count = spec if isinstance(spec, int) else len(spec)
        return [_Context() for _ in range(count)]

    def tabs(self, labels):
        return [_Context() for _ in labels]

    def expander(self, *args, **kwargs):
        return _Context()

    def spinner(self, *args, **kwargs):
        return _Context()

    def slider(self, label, **kwargs):
        self.calls.append(("slider", (label,), kwargs))
        return kwargs["value"]

    def selectbox(self, label, options, index=0, **kwargs):
        self.calls.append(("selectbox", (label,), kwargs))
        return list(options)[index]

    def checkbox(self, label, value=False, **kwargs):
        self.calls.append(("checkbox", (label,), kwargs))
        return value


@pytest.fixture
def fake_st():
    return FakeStreamlit()
