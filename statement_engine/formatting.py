# formatting.py
# ------------------------------------------------------------------
# Display formatting for extracted metrics.
#
# Numeric-like values (numbers, or strings such as "1000", "$1,000.50",
# "-250") are shown as whole-dollar currency: "$1,000". Anything else
# ("28%", "4.8x", "Q1 only") is passed through verbatim, and missing
# values are shown as "N/A".
# ------------------------------------------------------------------

import math
import re
from typing import Optional

from statement_engine.models import MetricValue

NOT_AVAILABLE = "N/A"

_NUMERIC_RE = re.compile(r"^[-+]?(\d+(\.\d*)?|\.\d+)$")


def parse_numeric(value: MetricValue) -> Optional[float]:
    """Return the float behind a numeric-like value, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        v = float(value)
        return v if math.isfinite(v) else None
    if isinstance(value, str):
        cleaned = re.sub(r"[\s,$]", "", value)
        if _NUMERIC_RE.match(cleaned):
            return float(cleaned)
    return None


def format_currency(value: MetricValue) -> str:
    """
    Format a metric value for the key-metrics grid.

    Examples:
        1000        -> "$1,000"
        "1,234.6"   -> "$1,235"
        -250        -> "-$250"
        "28%"       -> "28%"
        None        -> "N/A"
    """
    number = parse_numeric(value)
    if number is None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return NOT_AVAILABLE
        return str(value)
    rounded = round(number)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.0f}"


def humanize_key(key: str) -> str:
    """``cash_flow`` -> ``Cash Flow``; already-readable names are left as they are."""
    return " ".join(w[:1].upper() + w[1:] for w in key.split("_") if w)


def truncate(text: Optional[str], limit: int) -> str:
    text = text or ""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
