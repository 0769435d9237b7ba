"""
Display formatting for metric values.

Formats only; aggregation never depends on the format tag.

- currency: symbol prefix, thousands separators, exactly two decimals
  (1234.5 -> "$1,234.50", -12 -> "-$12.00")
- percent: the value is already in percent units, one decimal
  (75 -> "75.0%")
- number (default): thousands separators, up to two decimals with trailing
  zeros trimmed (1234.5 -> "1,234.5", 3 -> "3")
- None, NaN and infinities render as an em dash placeholder
"""

import math
from typing import Optional, Union

from recordforge.models import MetricFormat

PLACEHOLDER = "—"


def format_metric_value(
    value: Optional[Union[int, float]],
    fmt: Optional[MetricFormat] = None,
    currency_symbol: str = "$",
) -> str:
    """
    Render a metric value for display.

    Args:
        value: Aggregated metric value.
        fmt: Metric format tag; None means plain number.
        currency_symbol: Prefix for currency values.

    Returns:
        Display string.
    """
    if value is None or not math.isfinite(value):
        return PLACEHOLDER

    if fmt == MetricFormat.CURRENCY:
        sign = "-" if value < 0 else ""
        return f"{sign}{currency_symbol}{abs(value):,.2f}"

    if fmt == MetricFormat.PERCENT:
        return f"{value:,.1f}%"

    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
