"""
Tests for the behavioral migration models.
"""

import pytest

from tipping_point.behavior import (
    DEFAULT_BEHAVIORAL_PARAMS,
    MIGRATION_FORMULAS,
    BehavioralModelType,
    BehavioralParams,
    compute_migration_share,
    get_time_scale,
)

ALL_MODELS = list(BehavioralModelType)


class TestBehavioralParams:
    """Test parameter validation."""

    def test_defaults(self):
        params = DEFAULT_BEHAVIORAL_PARAMS
        assert params.model is BehavioralModelType.HYBRID
        assert params.base_migration_rate == 0.025
        assert params.max_migration_share == 0.12
        assert params.threshold_dollars == 100_000

    def test_string_model_is_coerced(self):
        params = BehavioralParams(model="threshold")
        assert params.model is BehavioralModelType.THRESHOLD

    def test_unknown_model_string_rejected(self):
        with pytest.raises(ValueError):
            BehavioralParams(model="exodus")

    @pytest.mark.parametrize("field_name", ["base_migration_rate", "max_migration_share", "replacement_rate"])
    def test_share_fields_bounded(self, field_name):
        with pytest.raises(ValueError, match=field_name):
            BehavioralParams(**{field_name: 1.5})

    def test_negative_elasticity_rejected(self):
        with pytest.raises(ValueError, match="migration_elasticity"):
            BehavioralParams(migration_elasticity=-0.1)

    def test_timing_shares_must_be_cumulative(self):
        with pytest.raises(ValueError, match="cumulative"):
            BehavioralParams(year1_share=0.8, year3_share=0.5)

    def test_numeric_fields_exclude_model(self):
        names = BehavioralParams.numeric_fields()
        assert "model" not in names
        assert "migration_elasticity" in names


class TestMigrationFormulas:
    """Test each curve and the shared scaling."""

    def test_every_model_has_a_formula(self):
        assert set(MIGRATION_FORMULAS) == set(BehavioralModelType)

    @pytest.mark.parametrize("model", ALL_MODELS)
    @pytest.mark.parametrize("additional_tax", [0, -1, -50_000])
    def test_no_burden_means_no_migration(self, model, additional_tax):
        params = BehavioralParams(model=model)
        assert compute_migration_share(additional_tax, 1_000_000, params, 5) == 0

    def test_none_model_never_migrates(self):
        params = BehavioralParams(model=BehavioralModelType.NONE)
        assert compute_migration_share(1_000_000, 2_000_000, params, 5) == 0

    def test_elasticity_hand_computed(self, elasticity_params):
        # 0.025 base + 1.0 x (10K / 1M)
        share = compute_migration_share(10_000, 1_000_000, elasticity_params, 5)
        assert share == pytest.approx(0.035)

    def test_elasticity_zero_income_saturates(self, elasticity_params):
        share = compute_migration_share(10_000, 0, elasticity_params, 5)
        assert share == pytest.approx(0.12)

    def test_elasticity_zero_income_without_elasticity(self):
        params = BehavioralParams(model=BehavioralModelType.ELASTICITY, migration_elasticity=0.0)
        assert compute_migration_share(10_000, 0, params, 5) == pytest.approx(0.025)

    def test_threshold_below_trigger_is_base_rate(self):
        params = BehavioralParams(model=BehavioralModelType.THRESHOLD)
        assert compute_migration_share(50_000, 2_000_000, params, 5) == pytest.approx(0.025)

    def test_threshold_ramp(self):
        params = BehavioralParams(model=BehavioralModelType.THRESHOLD)
        # Halfway up the ramp from threshold to 2x threshold
        assert compute_migration_share(150_000, 2_000_000, params, 5) == pytest.approx(0.0725)
        assert compute_migration_share(250_000, 2_000_000, params, 5) == pytest.approx(0.12)

    def test_threshold_zero_trigger_is_full_ramp(self):
        params = BehavioralParams(model=BehavioralModelType.THRESHOLD, threshold_dollars=0)
        assert compute_migration_share(1, 2_000_000, params, 5) == pytest.approx(0.12)

    def test_hybrid_midpoint_at_threshold(self):
        share = compute_migration_share(100_000, 5_000_000, DEFAULT_BEHAVIORAL_PARAMS, 5)
        assert share == pytest.approx(0.025 + (0.12 - 0.025) * 0.5)

    def test_hybrid_zero_slope_is_step(self):
        params = BehavioralParams(logistic_slope=0)
        assert compute_migration_share(99_999, 5_000_000, params, 5) == pytest.approx(0.025)
        assert compute_migration_share(100_000, 5_000_000, params, 5) == pytest.approx(0.0725)
        assert compute_migration_share(100_001, 5_000_000, params, 5) == pytest.approx(0.12)

    def test_hybrid_extreme_burden_does_not_overflow(self):
        share = compute_migration_share(1e12, 1e13, DEFAULT_BEHAVIORAL_PARAMS, 5)
        assert share == pytest.approx(0.12)

    def test_hybrid_monotonic_in_burden(self):
        burdens = [1_000 * i for i in range(1, 400)]
        shares = [compute_migration_share(b, 5_000_000, DEFAULT_BEHAVIORAL_PARAMS, 5) for b in burdens]
        assert all(b >= a for a, b in zip(shares, shares[1:]))

    @pytest.mark.parametrize("model", ALL_MODELS)
    @pytest.mark.parametrize("additional_tax", [1, 10_000, 100_000, 1_000_000, 1e9])
    @pytest.mark.parametrize("avg_agi", [0, 50_000, 2_000_000])
    def test_share_within_cap(self, model, additional_tax, avg_agi):
        params = BehavioralParams(model=model, migration_elasticity=4.0)
        share = compute_migration_share(additional_tax, avg_agi, params, 5)
        assert 0 <= share <= params.max_migration_share

    def test_elasticity_capped(self):
        params = BehavioralParams(model=BehavioralModelType.ELASTICITY, migration_elasticity=4.0)
        assert compute_migration_share(100_000, 200_000, params, 5) == pytest.approx(0.12)


class TestTimingAndReplacement:
    """Test horizon scaling and replacement offset."""

    def test_time_scale_lookup(self):
        assert get_time_scale(1, DEFAULT_BEHAVIORAL_PARAMS) == 0.3
        assert get_time_scale(3, DEFAULT_BEHAVIORAL_PARAMS) == 0.7
        assert get_time_scale(5, DEFAULT_BEHAVIORAL_PARAMS) == 1.0
        assert get_time_scale(10, DEFAULT_BEHAVIORAL_PARAMS) == 1.0

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_longer_horizon_migrates_more(self, model):
        params = BehavioralParams(model=model)
        year1 = compute_migration_share(150_000, 2_000_000, params, 1)
        year3 = compute_migration_share(150_000, 2_000_000, params, 3)
        year5 = compute_migration_share(150_000, 2_000_000, params, 5)
        assert year1 <= year3 <= year5

    def test_year_one_scaling(self, elasticity_params):
        share = compute_migration_share(10_000, 1_000_000, elasticity_params, 1)
        assert share == pytest.approx(0.035 * 0.3)

    def test_replacement_offsets_departures(self):
        params = BehavioralParams(model=BehavioralModelType.ELASTICITY, replacement_rate=0.5)
        share = compute_migration_share(10_000, 1_000_000, params, 5)
        assert share == pytest.approx(0.0175)

    def test_full_replacement_means_no_net_migration(self):
        params = BehavioralParams(replacement_rate=1.0)
        assert compute_migration_share(500_000, 5_000_000, params, 5) == 0
