# sample_data.py
# ------------------------------------------------------------------
# Fixed demonstration series for the auxiliary results charts.
#
# The cash-flow trend, inflow/outflow and waterfall charts are NOT
# derived from uploaded documents; the extraction endpoint returns a
# flat metric mapping without period history or activity breakdowns.
# The results page labels these charts as sample data.
# ------------------------------------------------------------------

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class CashFlowSample:
    periods: List[str]
    operating_cash_flow: List[float]
    inflows: Dict[str, List[float]]
    outflows: Dict[str, List[float]]
    component_labels: List[str] = field(default_factory=list)
    component_values: List[float] = field(default_factory=list)


SAMPLE_CASH_FLOW = CashFlowSample(
    periods=["Q1 2024", "Q2 2024", "Q3 2024", "Q4 2024", "Q1 2025"],
    operating_cash_flow=[120000, 135000, 150000, 142000, 160000],
    inflows={
        "Operating": [200000, 220000, 240000, 230000, 250000],
        "Investing": [50000, 30000, 40000, 60000, 45000],
        "Financing": [80000, 90000, 70000, 85000, 95000],
    },
    outflows={
        "Operating": [80000, 85000, 90000, 88000, 90000],
        "Investing": [70000, 65000, 75000, 80000, 85000],
        "Financing": [60000, 70000, 65000, 75000, 80000],
    },
    component_labels=[
        "Net Income",
        "Depreciation",
        "Changes in Working Capital",
        "Other Adjustments",
        "Cash from Operations",
    ],
    component_values=[100000, 30000, -15000, 45000, 160000],
)

# Single-quarter income statement used when previewing the metrics chart
# without any processed documents.
SAMPLE_METRICS: Dict[str, Dict[str, object]] = {
    "Revenue":            {"value": 15383073, "from": "2023-01-01", "to": "2023-03-31"},
    "Cost":               {"value": 6490407,  "from": "2023-01-01", "to": "2023-03-31"},
    "Gross Profit":       {"value": 8883606,  "from": "2023-01-01", "to": "2023-03-31"},
    "Operating Expenses": {"value": 4493916,  "from": "2023-01-01", "to": "2023-03-31"},
    "Operating Income":   {"value": 4399690,  "from": "2023-01-01", "to": "2023-03-31"},
    "Net Income":         {"value": 5307315,  "from": "2023-01-01", "to": "2023-03-31"},
}
