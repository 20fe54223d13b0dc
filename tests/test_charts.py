# tests/test_charts.py
# -----------------------------------------------------------------------
# Unit tests for ui/charts.py
#
# Only figure structure is checked; nothing is rendered.
# -----------------------------------------------------------------------

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from statement_engine.models import FinancialMetric
from statement_engine.sample_data import SAMPLE_CASH_FLOW
from ui.charts import (
    chart_cash_components,
    chart_cash_flow_trend,
    chart_cash_flows,
    chart_financial_metrics,
    quarter_label,
    simulated_history,
    waterfall_colors,
)
from ui.components import BLUE, DOWN, TEAL, UP


class TestQuarterLabel:
    @pytest.mark.parametrize("date, expected", [
        ("2023-01-01", "Q1 2023"),
        ("2024-04-15", "Q2 2024"),
        ("2024-12-31", "Q4 2024"),
    ])
    def test_quarters(self, date, expected):
        assert quarter_label(date) == expected

    def test_unparseable(self):
        assert quarter_label("not a date") is None
        assert quarter_label(None) is None


class TestSimulatedHistory:
    def test_last_point_is_current_value(self):
        series = simulated_history(1000, np.random.default_rng(1))
        assert len(series) == 5
        assert series[-1] == 1000
        assert series[:4] == sorted(series[:4])
        assert all(0 < v < 1000 for v in series[:4])

    def test_non_numeric_is_flat_zero(self):
        assert simulated_history("n/a", np.random.default_rng(1)) == [0.0] * 5


class TestFinancialMetricsChart:
    def test_no_matching_metrics(self):
        assert chart_financial_metrics({}) is None
        assert chart_financial_metrics({"assets": FinancialMetric(5)}) is None

    def test_traces_follow_fixed_subset(self):
        metrics = {
            "Net Income": FinancialMetric(50),
            "Revenue": FinancialMetric(100, "2024-04-01", "2024-06-30"),
            "assets": FinancialMetric(999),
        }
        fig = chart_financial_metrics(metrics, seed=0, prior_year=2023)
        assert [t.name for t in fig.data] == ["Revenue", "Net Income"]
        assert list(fig.data[0].x) == ["Q1 2023", "Q2 2023", "Q3 2023", "Q4 2023", "Q2 2024"]

    def test_case_insensitive_match(self):
        fig = chart_financial_metrics({"gross_profit": FinancialMetric(10)}, seed=0, prior_year=2023)
        assert [t.name for t in fig.data] == ["Gross Profit"]
        assert fig.data[0].x[-1] == "Q1 2023"

    def test_seed_is_reproducible(self):
        metrics = {"Revenue": FinancialMetric(100)}
        a = chart_financial_metrics(metrics, seed=7)
        b = chart_financial_metrics(metrics, seed=7)
        assert list(a.data[0].y) == list(b.data[0].y)


class TestSampleCharts:
    def test_trend(self):
        fig = chart_cash_flow_trend()
        assert list(fig.data[0].y) == SAMPLE_CASH_FLOW.operating_cash_flow

    def test_outflows_negated(self):
        fig = chart_cash_flows()
        assert len(fig.data) == 6
        outflow = next(t for t in fig.data if t.name == "Operating Outflows")
        assert list(outflow.y) == [-v for v in SAMPLE_CASH_FLOW.outflows["Operating"]]
        assert fig.layout.barmode == "relative"

    def test_waterfall_colors(self):
        assert waterfall_colors([100, 30, -15, 45, 160]) == [BLUE, UP, DOWN, UP, TEAL]

    def test_waterfall_bars(self):
        fig = chart_cash_components()
        assert list(fig.data[0].x) == SAMPLE_CASH_FLOW.component_labels
        assert list(fig.data[0].y) == SAMPLE_CASH_FLOW.component_values
