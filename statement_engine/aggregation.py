# aggregation.py
# ------------------------------------------------------------------
# Merges per-document extraction results into one metric mapping and
# derives the summary figures shown on the results page.
#
# Merge policy (first writer wins):
#   A metric key from a later result is only taken when the key is not
#   present yet, or when the stored entry has no value and the new one
#   does. A later non-empty value never overwrites an earlier one, so
#   the outcome depends only on the order of the results.
# ------------------------------------------------------------------

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from statement_engine.constants import PRIORITY_METRIC_KEYS, category_name
from statement_engine.formatting import format_currency, humanize_key
from statement_engine.models import FileMetadata, FinancialMetric, ProcessingResult


def aggregate_metrics(results: Iterable[ProcessingResult]) -> Dict[str, FinancialMetric]:
    """Combine the financial_data of every successful result, first value wins."""
    combined: Dict[str, FinancialMetric] = {}
    for result in results:
        if not result.success or not result.financial_data:
            continue
        for key, metric in result.financial_data.items():
            existing = combined.get(key)
            if existing is None or (not existing.has_value and metric.has_value):
                combined[key] = metric
    return combined


@dataclass
class UploadStats:
    count: int = 0
    success_count: int = 0
    error_count: int = 0
    categories: List[str] = field(default_factory=list)


def upload_stats(
    metadata: List[FileMetadata],
    results: List[ProcessingResult],
) -> UploadStats:
    """
    Counts for the "Upload Status Summary" panel.

    ``count`` is the number of processed documents, i.e. the number of
    results; metadata only contributes category names.
    """
    return UploadStats(
        count=len(results),
        success_count=sum(1 for r in results if r.success),
        error_count=sum(1 for r in results if not r.success),
        categories=[category_name(m.category) for m in metadata],
    )


@dataclass(frozen=True)
class MetricRow:
    key: str
    label: str
    display_value: str
    period: Optional[str]


def _ordered_keys(metrics: Dict[str, FinancialMetric]) -> List[str]:
    priority = [k for k in PRIORITY_METRIC_KEYS if k in metrics]
    rest = [k for k in metrics if k not in PRIORITY_METRIC_KEYS]
    return priority + rest


def metric_display_rows(metrics: Dict[str, FinancialMetric]) -> List[MetricRow]:
    """Rows for the key-metrics grid: priority keys first, then insertion order."""
    return [
        MetricRow(
            key=key,
            label=humanize_key(key),
            display_value=format_currency(metrics[key].value),
            period=metrics[key].period,
        )
        for key in _ordered_keys(metrics)
    ]


def metrics_frame(metrics: Dict[str, FinancialMetric]) -> pd.DataFrame:
    """Tabular view of the aggregated metrics (also used for CSV export)."""
    columns = ["Metric", "Value", "Formatted", "From", "To"]
    rows: List[Tuple] = [
        (
            humanize_key(key),
            metrics[key].value,
            format_currency(metrics[key].value),
            metrics[key].period_from or "",
            metrics[key].period_to or "",
        )
        for key in _ordered_keys(metrics)
    ]
    return pd.DataFrame(rows, columns=columns)
