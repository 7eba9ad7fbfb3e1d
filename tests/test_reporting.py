"""
Tests for exports, the text report and formatting helpers.
"""

import io
import json

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from tipping_point.formatting import format_currency, format_number, format_percent, format_signed_currency
from tipping_point.reporting import (
    CSV_HEADER,
    PARAMETER_SOURCES,
    TippingPointReport,
    export_assumptions_json,
    export_results_csv,
    load_assumptions_json,
    results_to_dataframe,
)
from tipping_point.scenarios import generate_revenue_curve


class TestResultsCsv:
    """Test the results CSV export."""

    def test_header_and_rows(self, default_output, default_input):
        csv_text = export_results_csv(default_output, default_input)
        lines = csv_text.split("\n")
        assert lines[0] == ",".join(CSV_HEADER)
        assert lines[0].startswith("Cohort,Filers,Avg AGI")
        assert "Under $25K" in csv_text
        # Header, ten cohorts, blank line, four summary rows
        assert len(lines) == 16
        assert lines[11] == ""

    def test_cohort_labels_quoted(self, default_output, default_input):
        lines = export_results_csv(default_output, default_input).split("\n")
        assert lines[1].startswith('"Under $25K",3842000,')
        assert all(line.startswith('"') for line in lines[1:11])

    def test_summary_rows(self, default_output, default_input):
        lines = export_results_csv(default_output, default_input).split("\n")
        assert lines[12] == f"Total Mechanical Gain,{round(default_output.total_mechanical_gain)}"
        assert lines[13].startswith("Total Behavioral Loss,")
        assert lines[14] == f"Net Revenue Change,{round(default_output.net_revenue_change)}"
        assert lines[15] == "Time Horizon,5 years"

    def test_cohort_rows_parse(self, default_output, default_input):
        csv_text = export_results_csv(default_output, default_input)
        df = pd.read_csv(io.StringIO(csv_text), nrows=10)
        assert list(df.columns) == CSV_HEADER
        assert df["Filers"].iloc[0] == 3_842_000
        assert df["Migration %"].iloc[0] == "0.00%"
        assert df["Mechanical Gain"].iloc[-1] == round(default_output.cohort_results[-1].mechanical_gain)

    def test_dataframe(self, default_output):
        df = results_to_dataframe(default_output)
        assert len(df) == 10
        assert df["Net Revenue Change"].sum() == pytest.approx(default_output.net_revenue_change)


class TestAssumptionsJson:
    """Test the assumptions JSON export."""

    def test_well_formed(self, default_input):
        document = json.loads(export_assumptions_json(default_input))
        assert set(document) >= {"policy", "behavioral", "time_horizon", "middle_income_range",
                                 "data_year", "data_sources"}
        assert document["behavioral"]["model"] == "hybrid"
        assert document["data_year"] == 2021
        assert any("TY2021" in s for s in document["data_sources"])

    def test_every_parameter_has_a_source(self, default_input):
        behavioral = json.loads(export_assumptions_json(default_input))["behavioral"]
        parameters = {k for k in behavioral if not k.startswith("_")}
        assert parameters == set(behavioral["_sources"])
        assert set(PARAMETER_SOURCES) == parameters

    def test_sources_match_defaults(self):
        assert "2.5%" in PARAMETER_SOURCES["base_migration_rate"]
        assert "12%" in PARAMETER_SOURCES["max_migration_share"]
        assert "default 1.0" in PARAMETER_SOURCES["migration_elasticity"]

    def test_round_trip(self, default_input):
        changed = default_input.with_policy(surcharge_rate=0.035).with_behavioral(replacement_rate=0.1)
        assert load_assumptions_json(export_assumptions_json(changed)) == changed

    @pytest.mark.parametrize("text", [
        "not json",
        "[1, 2]",
        '{"middle_income_range": null}',
        '{"middle_income_range": {"min": 1}}',
        '{"policy": null}',
        '{"policy": []}',
        '{"behavioral": "hybrid"}',
    ])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            load_assumptions_json(text)


class TestTippingPointReport:
    """Test the text report and plot."""

    def test_text_report(self, default_output, default_input):
        curve = generate_revenue_curve(default_input, steps=10)
        text = TippingPointReport(default_output, default_input, curve).generate_text_report()
        assert "NY TAX TIPPING POINT REPORT" in text
        assert "Over $25M" in text
        assert "REVENUE CURVE" in text
        assert "hybrid" in text

    def test_summary_without_shortfall(self, default_output, default_input):
        paragraphs = TippingPointReport(default_output, default_input).plain_english_summary()
        assert paragraphs[0].startswith("Under a 2.0% surcharge on income above $1.0M")
        assert not any("To close this gap" in p for p in paragraphs)

    def test_summary_with_shortfall(self, shortfall_output, shortfall_input):
        paragraphs = TippingPointReport(shortfall_output, shortfall_input).plain_english_summary()
        assert any("To close this gap" in p for p in paragraphs)

    def test_plot(self, default_output, default_input):
        curve = generate_revenue_curve(default_input, steps=10)
        fig = TippingPointReport(default_output, default_input, curve).plot_revenue_curve(show=False)
        assert isinstance(fig, plt.Figure)
        plt.close(fig)

    def test_plot_saves(self, default_output, default_input, tmp_path):
        curve = generate_revenue_curve(default_input, steps=5)
        path = tmp_path / "curve.png"
        fig = TippingPointReport(default_output, default_input, curve).plot_revenue_curve(
            save_path=str(path), show=False)
        plt.close(fig)
        assert path.exists()

    def test_plot_needs_curve(self, default_output, default_input):
        with pytest.raises(ValueError):
            TippingPointReport(default_output, default_input).plot_revenue_curve(show=False)


class TestFormatting:
    """Test display helpers."""

    @pytest.mark.parametrize("value,expected", [
        (1.5e9, "$1.5B"),
        (-1.5e9, "-$1.5B"),
        (2_500_000, "$2.5M"),
        (56_000, "$56K"),
        (750, "$750"),
    ])
    def test_compact_currency(self, value, expected):
        assert format_currency(value, compact=True) == expected

    def test_full_currency(self):
        assert format_currency(1_234) == "$1,234"
        assert format_currency(-1_234_567) == "-$1,234,567"

    def test_percent(self):
        assert format_percent(0.025) == "2.5%"
        assert format_percent(0.12, 0) == "12%"

    def test_number(self):
        assert format_number(10_421_000) == "10,421,000"

    def test_signed(self):
        assert format_signed_currency(2.29e9) == "+$2.3B"
        assert format_signed_currency(-2.07e9) == "-$2.1B"
