# constants.py
# ------------------------------------------------------------------
# Shared constants used across statement_engine modules and the UI.
#
# Categories, session-storage keys, route names and chart metric
# subsets are defined once here so that the intake, the coordinator,
# the navigation guards and the dashboard all agree on them.
# ------------------------------------------------------------------

from typing import Dict, List, Tuple

# ------------------------------------------------------------------
# Financial statement categories
# ------------------------------------------------------------------
# Format: (id, display name, upload hint)
# Order matters: the upload grid and the processing checklist both
# iterate categories in this order.
FINANCIAL_CATEGORIES: List[Tuple[str, str, str]] = [
    ("operating-cost", "Operating Cost", "Upload an image of your operating costs statement"),
    ("balance-sheet",  "Balance Sheet",  "Upload an image of your balance sheet"),
    ("cash-flow",      "Cash Flow",      "Upload an image of your cash flow statement"),
    ("profit",         "Profit",         "Upload an image of your profit statement"),
]

CATEGORY_IDS: List[str] = [c[0] for c in FINANCIAL_CATEGORIES]
CATEGORY_NAMES: Dict[str, str] = {c[0]: c[1] for c in FINANCIAL_CATEGORIES}


def category_name(category_id: str) -> str:
    """Display name for a category id; unknown ids are returned unchanged."""
    return CATEGORY_NAMES.get(category_id, category_id)


# Only image content types are accepted by the intake.
ACCEPTED_MIME_PREFIX = "image/"
# Extensions offered to the browser file picker.
ACCEPTED_EXTENSIONS: List[str] = ["jpg", "jpeg", "png", "gif"]

# ------------------------------------------------------------------
# Session-scoped storage keys
# ------------------------------------------------------------------
KEY_UPLOADED_FILES_METADATA = "uploadedFilesMetadata"
KEY_PROCESSING_RESULTS      = "processingResults"
KEY_PROCESSING_COMPLETE     = "processingComplete"

SESSION_KEYS: Tuple[str, ...] = (
    KEY_UPLOADED_FILES_METADATA,
    KEY_PROCESSING_RESULTS,
    KEY_PROCESSING_COMPLETE,
)

# ------------------------------------------------------------------
# Routes (carried in the "page" query parameter)
# ------------------------------------------------------------------
ROUTE_HOME       = "home"
ROUTE_UPLOAD     = "upload-documents"
ROUTE_PROCESSING = "processing-documents"
ROUTE_RESULTS    = "view-results"

ROUTES: Tuple[str, ...] = (ROUTE_HOME, ROUTE_UPLOAD, ROUTE_PROCESSING, ROUTE_RESULTS)

# ------------------------------------------------------------------
# Submission progress
# ------------------------------------------------------------------
# Progress jumps to PROGRESS_START as soon as the sequential loop begins,
# and the remaining PROGRESS_SPAN is shared evenly between the files.
PROGRESS_START: float = 10.0
PROGRESS_SPAN:  float = 90.0
PROGRESS_DONE:  float = 100.0

# ------------------------------------------------------------------
# Dashboard
# ------------------------------------------------------------------
# Metrics shown first in the key-metrics grid, in this order.
PRIORITY_METRIC_KEYS: List[str] = [
    "revenue", "income", "profit", "assets", "cash_flow", "operating_cost",
]

# Fixed subset drawn on the performance line chart.
LINE_CHART_METRICS: List[str] = [
    "Revenue",
    "Cost",
    "Gross Profit",
    "Operating Expenses",
    "Operating Income",
    "Net Income",
]

# Characters of OCR text shown in the per-document preview.
OCR_PREVIEW_CHARS = 500
