"""
Tests for the middle-income offset calculator.
"""

import pytest

from tipping_point.offset import compute_middle_income_offset


class TestNoShortfall:
    """Surplus or break-even policies need no offset."""

    @pytest.mark.parametrize("net", [0, 1.0, 2.3e9])
    def test_rate_fields_are_none(self, net, baseline_cohorts):
        offset = compute_middle_income_offset(net, 75_000, 200_000, baseline_cohorts)
        assert offset.rate_increase is None
        assert offset.per_filer is None
        assert offset.pct_income is None
        assert not offset.has_shortfall

    def test_counts_cohorts_fully_inside_band(self, baseline_cohorts):
        offset = compute_middle_income_offset(1e9, 75_000, 200_000, baseline_cohorts)
        # $75K-$100K and $100K-$200K
        assert offset.filer_count == 856_000 + 1_423_000

    def test_partial_cohorts_not_counted(self, baseline_cohorts):
        offset = compute_middle_income_offset(1e9, 50_000, 150_000, baseline_cohorts)
        assert offset.filer_count == 1_287_000 + 856_000


class TestShortfall:
    """Deficit policies spread the gap over the band."""

    def test_positive_rate_and_per_filer(self, baseline_cohorts):
        offset = compute_middle_income_offset(-2e9, 75_000, 200_000, baseline_cohorts)
        assert offset.has_shortfall
        assert offset.rate_increase > 0
        assert offset.per_filer > 0

    def test_hand_computed_full_overlap(self, baseline_cohorts):
        offset = compute_middle_income_offset(-2e9, 75_000, 200_000, baseline_cohorts)
        band_agi = 74.1e9 + 199.6e9
        band_filers = 856_000 + 1_423_000
        assert offset.rate_increase == pytest.approx(2e9 / band_agi)
        assert offset.per_filer == pytest.approx(2e9 / band_filers)
        assert offset.filer_count == band_filers

    def test_pct_income_equals_rate(self, baseline_cohorts):
        offset = compute_middle_income_offset(-1e9, 50_000, 150_000, baseline_cohorts)
        assert offset.pct_income == pytest.approx(offset.rate_increase)

    def test_partial_overlap_is_prorated(self, baseline_cohorts):
        offset = compute_middle_income_offset(-1e9, 50_000, 150_000, baseline_cohorts)
        # Half of the $100K-$200K cohort lies inside the band
        assert offset.filer_count == round(1_287_000 + 856_000 + 1_423_000 * 0.5)
        band_agi = 80.1e9 + 74.1e9 + 199.6e9 * 0.5
        assert offset.rate_increase == pytest.approx(1e9 / band_agi)

    def test_model_output_carries_offset(self, shortfall_output):
        assert shortfall_output.net_revenue_change < 0
        assert shortfall_output.middle_income_offset > 0
        assert shortfall_output.middle_income_offset_per_filer * shortfall_output.middle_income_filer_count == (
            pytest.approx(abs(shortfall_output.net_revenue_change), rel=1e-6)
        )


class TestDegenerateBands:
    """Bands with no income to absorb a shortfall."""

    def test_empty_band(self, baseline_cohorts):
        offset = compute_middle_income_offset(-1e9, 100_000, 100_000, baseline_cohorts)
        assert offset.rate_increase is None
        assert offset.filer_count == 0

    def test_band_inside_unbounded_cohort(self, baseline_cohorts):
        offset = compute_middle_income_offset(-1e9, 30_000_000, 40_000_000, baseline_cohorts)
        assert offset.rate_increase is None
        assert offset.per_filer is None
        assert offset.filer_count == 0

    def test_no_cohorts(self):
        offset = compute_middle_income_offset(-1e9, 75_000, 200_000, [])
        assert offset.rate_increase is None
