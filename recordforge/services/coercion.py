"""
Explicit scalar conversion steps shared by the validator and the analytics runtime.

Every implicit coercion the runtime performs goes through a named function
here so it can be audited and tested on its own:

- is_missing: absent/None/empty-string detection
- coerce_number: numbers and numeric strings to int/float
- coerce_boolean: booleans and the exact strings "true"/"false"
- parse_calendar_date: strict YYYY-MM-DD parsing with round-trip check
- parse_date_value: lenient date parsing for time-range filtering
- canonical_string: the string form used for comparison and grouping keys
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Union

Number = Union[int, float]

_INTEGER_RE = re.compile(r'^[+-]?\d+$', re.ASCII)
_DECIMAL_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$', re.ASCII)
_CALENDAR_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$', re.ASCII)


def is_missing(value: Any) -> bool:
    """Absent, None and the empty string all count as missing."""
    return value is None or (isinstance(value, str) and value == '')


def coerce_number(value: Any) -> Optional[Number]:
    """
    Convert a number or numeric string to a finite int/float.

    Booleans are not numbers here. Strings may carry surrounding whitespace
    and must otherwise be a plain decimal literal (optional sign, fraction,
    exponent). Integer literals stay ints. NaN, infinities and integers
    beyond the float range are rejected.

    Returns:
        The numeric value, or None when the input is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if _fits_float(value) else None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _INTEGER_RE.match(text):
            try:
                number = int(text)
            except ValueError:
                # digit strings past the interpreter's int conversion limit
                return None
            return number if _fits_float(number) else None
        if _DECIMAL_RE.match(text):
            parsed = float(text)
            return parsed if math.isfinite(parsed) else None
    return None


def _fits_float(value: int) -> bool:
    try:
        float(value)
    except OverflowError:
        return False
    return True


def coerce_boolean(value: Any) -> Optional[bool]:
    """Accept a bool or exactly "true"/"false"; anything else is None."""
    if isinstance(value, bool):
        return value
    if value == 'true':
        return True
    if value == 'false':
        return False
    return None


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Strictly parse a YYYY-MM-DD string.

    The format must match exactly and the date must exist in the calendar,
    so "2026-02-30" and "2026-13-01" are rejected even though they match
    the pattern.
    """
    if not isinstance(value, str) or not _CALENDAR_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_date_value(value: Any) -> Optional[date]:
    """
    Leniently read a calendar date from a stored value.

    Accepts date/datetime objects, YYYY-MM-DD strings, and ISO 8601
    date-time strings. Date-times are truncated to their own calendar date
    without timezone conversion.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    strict = parse_calendar_date(text)
    if strict is not None:
        return strict
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        return None


def canonical_string(value: Any) -> str:
    """
    String form used for loose equality, `in` matching and group keys.

    Booleans render as "true"/"false" and integral floats drop their ".0",
    so the number 5, the float 5.0 and the string "5" share one form.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value
    return str(value)
