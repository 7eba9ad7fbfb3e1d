"""
Tests for policy definitions and the dictionary parameter surface.
"""

from dataclasses import replace

import pytest

from tipping_point.behavior import BehavioralModelType
from tipping_point.policies import (
    DEFAULT_INPUT,
    DEFAULT_POLICY,
    NOOP_POLICY,
    TIME_HORIZONS,
    ModelInput,
    PolicyChange,
    behavioral_from_dict,
    model_input_from_dict,
    model_input_to_dict,
    policy_from_dict,
)


class TestDefaults:
    """Test module-level defaults."""

    def test_default_policy(self):
        assert DEFAULT_POLICY.surcharge_rate == 0.02
        assert DEFAULT_POLICY.surcharge_threshold == 1_000_000
        assert DEFAULT_POLICY.include_nyc
        assert DEFAULT_POLICY.nyc_surcharge_rate == 0

    def test_default_input(self):
        assert DEFAULT_INPUT.time_horizon == 5
        assert (DEFAULT_INPUT.middle_income_min, DEFAULT_INPUT.middle_income_max) == (75_000, 200_000)
        assert DEFAULT_INPUT.behavioral.model is BehavioralModelType.HYBRID
        assert DEFAULT_INPUT.time_horizon in TIME_HORIZONS

    def test_noop(self):
        assert NOOP_POLICY.is_noop
        assert not DEFAULT_POLICY.is_noop
        assert not PolicyChange(surcharge_rate=0, nyc_surcharge_rate=0.01).is_noop
        assert PolicyChange(surcharge_rate=0, nyc_surcharge_rate=0.01, include_nyc=False).is_noop
        assert PolicyChange(surcharge_rate=0.02, surcharge_threshold=0, include_nyc=False).is_noop

    def test_with_helpers_copy(self):
        changed = DEFAULT_INPUT.with_policy(surcharge_rate=0.05).with_behavioral(max_migration_share=0.2)
        assert changed.policy.surcharge_rate == 0.05
        assert changed.behavioral.max_migration_share == 0.2
        assert DEFAULT_INPUT.policy.surcharge_rate == 0.02
        assert DEFAULT_INPUT.behavioral.max_migration_share == 0.12

    def test_inputs_are_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_INPUT.time_horizon = 3


class TestFromDict:
    """Test building inputs from plain dictionaries."""

    def test_snake_case(self):
        policy = policy_from_dict({"surcharge_rate": 0.03, "include_nyc": False})
        assert policy.surcharge_rate == 0.03
        assert not policy.include_nyc
        assert policy.surcharge_threshold == DEFAULT_POLICY.surcharge_threshold

    def test_camel_case(self):
        model_input = model_input_from_dict({
            "policy": {"surchargeRate": 0.01, "nycSurchargeRate": 0.005},
            "behavioral": {"model": "elasticity", "migrationElasticity": 2.0},
            "timeHorizon": 3,
            "middleIncomeMin": 50_000,
            "middleIncomeMax": 150_000,
        })
        assert model_input.policy.surcharge_rate == 0.01
        assert model_input.policy.nyc_surcharge_rate == 0.005
        assert model_input.behavioral.model is BehavioralModelType.ELASTICITY
        assert model_input.behavioral.migration_elasticity == 2.0
        assert model_input.time_horizon == 3
        assert model_input.middle_income_min == 50_000

    def test_empty_is_default(self):
        assert model_input_from_dict({}) == DEFAULT_INPUT

    def test_middle_income_range_section(self):
        model_input = model_input_from_dict({"middle_income_range": {"min": 100_000, "max": 250_000}})
        assert (model_input.middle_income_min, model_input.middle_income_max) == (100_000, 250_000)

    def test_annotations_ignored(self):
        behavioral = behavioral_from_dict({"model": "hybrid", "_sources": {"model": "text"}})
        assert behavioral.model is BehavioralModelType.HYBRID

    @pytest.mark.parametrize("data", [
        {"policy": {"surcharge": 0.01}},
        {"behavioral": {"elasticity": 1.0}},
        {"horizon": 5},
    ])
    def test_unknown_keys_rejected(self, data):
        with pytest.raises(ValueError, match="Unknown"):
            model_input_from_dict(data)

    def test_unknown_model_rejected(self):
        with pytest.raises(ValueError, match="behavioral model"):
            behavioral_from_dict({"model": "exodus"})

    def test_invalid_value_rejected(self):
        with pytest.raises(ValueError):
            behavioral_from_dict({"max_migration_share": 2.0})


class TestToDict:
    """Test the inverse conversion."""

    def test_round_trip(self):
        model_input = ModelInput(
            policy=PolicyChange(surcharge_rate=0.03, flat_rate_change=-0.001, nyc_surcharge_rate=0.01),
            behavioral=replace(DEFAULT_INPUT.behavioral, model=BehavioralModelType.THRESHOLD),
            time_horizon=1,
            middle_income_min=50_000,
            middle_income_max=150_000,
        )
        assert model_input_from_dict(model_input_to_dict(model_input)) == model_input

    def test_model_serialized_as_tag(self):
        data = model_input_to_dict(DEFAULT_INPUT)
        assert data["behavioral"]["model"] == "hybrid"
        assert data["data_year"] == 2021
        assert data["middle_income_range"] == {"min": 75_000, "max": 200_000}
