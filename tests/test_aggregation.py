# tests/test_aggregation.py
# -----------------------------------------------------------------------
# Unit tests for statement_engine/aggregation.py
#
# Merge order, failed-result handling, summary counts and the display
# rows / DataFrame used by the results page.
# -----------------------------------------------------------------------

import pandas as pd
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from statement_engine.aggregation import (
    aggregate_metrics,
    metric_display_rows,
    metrics_frame,
    upload_stats,
)
from statement_engine.models import FileMetadata, FinancialMetric, ProcessingResult


# ── Helpers ────────────────────────────────────────────────────────────

def _make_result(data=None, success=True, error=None) -> ProcessingResult:
    payload = {"success": success}
    if data is not None:
        payload["financial_data"] = data
    if error:
        payload["error"] = error
    return ProcessingResult.from_payload(payload)


def _make_meta(category: str) -> FileMetadata:
    return FileMetadata(id=f"{category}-1", category=category,
                        original_file_name=f"{category}.png", file_type="image/png", file_size=3)


# ═══════════════════════════════════════════════════════════════════════
# aggregate_metrics
# ═══════════════════════════════════════════════════════════════════════

class TestAggregateMetrics:
    def test_first_writer_wins(self):
        merged = aggregate_metrics([
            _make_result({"A": {"value": 1}}),
            _make_result({"A": {"value": 2}}),
        ])
        assert merged["A"].value == 1

    def test_later_value_fills_undefined(self):
        merged = aggregate_metrics([
            _make_result({"A": {"value": None}}),
            _make_result({"A": {"value": 5, "from": "2024-01-01", "to": "2024-03-31"}}),
        ])
        assert merged["A"].value == 5
        assert merged["A"].period_from == "2024-01-01"

    def test_undefined_never_overwrites_defined(self):
        merged = aggregate_metrics([
            _make_result({"A": {"value": 0}}),
            _make_result({"A": {"value": None}}),
        ])
        assert merged["A"].value == 0

    def test_failed_and_empty_results_skipped(self):
        merged = aggregate_metrics([
            _make_result({"A": {"value": 9}}, success=False, error="bad"),
            _make_result(None),
            _make_result({"B": 3}),
        ])
        assert list(merged) == ["B"]
        assert merged["B"].value == 3

    def test_union_of_keys(self):
        merged = aggregate_metrics([
            _make_result({"A": {"value": 1}}),
            _make_result({"B": {"value": 2}}),
        ])
        assert set(merged) == {"A", "B"}

    def test_empty_input(self):
        assert aggregate_metrics([]) == {}


class TestUploadStats:
    def test_counts(self):
        results = [_make_result({}), _make_result(success=False, error="x"), _make_result({})]
        stats = upload_stats([_make_meta("profit"), _make_meta("cash-flow")], results)
        assert stats.count == 3
        assert stats.success_count == 2
        assert stats.error_count == 1
        assert stats.categories == ["Profit", "Cash Flow"]


class TestDisplayRows:
    def test_revenue_row(self):
        rows = metric_display_rows({"Revenue": FinancialMetric(value=1000)})
        assert f"{rows[0].label}: {rows[0].display_value}" == "Revenue: $1,000"

    def test_priority_keys_first(self):
        metrics = {
            "ebitda": FinancialMetric(value=1),
            "assets": FinancialMetric(value=2),
            "revenue": FinancialMetric(value=3),
        }
        assert [r.key for r in metric_display_rows(metrics)] == ["revenue", "assets", "ebitda"]

    def test_labels_and_periods(self):
        rows = metric_display_rows({
            "cash_flow": FinancialMetric(value="28%", period_from="2024-01-01", period_to="2024-12-31"),
        })
        assert rows[0].label == "Cash Flow"
        assert rows[0].display_value == "28%"
        assert rows[0].period == "2024-01-01 to 2024-12-31"


class TestMetricsFrame:
    def test_columns_and_values(self):
        df = metrics_frame({"revenue": FinancialMetric(value=1234.6), "margin": FinancialMetric(value=None)})
        assert list(df.columns) == ["Metric", "Value", "Formatted", "From", "To"]
        assert df.iloc[0]["Formatted"] == "$1,235"
        assert df.iloc[1]["Formatted"] == "N/A"

    def test_empty(self):
        df = metrics_frame({})
        assert isinstance(df, pd.DataFrame)
        assert df.empty
