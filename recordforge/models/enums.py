"""
Enumeration definitions for the recordforge template runtime.

This module provides the closed sets of tags used by template specifications:
field types, view types, filter operators, metric operators and formats,
time-range presets, chart kinds and intervals, and group sort directions.

All enums inherit from both `str` and `Enum` so that they serialize to their
plain tag values in JSON and compare equal to the raw strings stored inside
template documents.
"""

from enum import Enum


class FieldType(str, Enum):
    """
    Discriminator tag for schema fields.

    - string: free text, must already be a string
    - number: numeric value, numeric strings are coerced; optional min/max
    - boolean: true/false, the exact strings "true"/"false" are coerced
    - date: calendar date in YYYY-MM-DD form
    - select: one of a non-empty ordered list of options
    """
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SELECT = "select"


class ViewType(str, Enum):
    """
    Discriminator tag for template views.

    - form: input-oriented view, no extra configuration
    - table: tabular listing, optional explicit column list
    - summary: metric cards plus optional grouped breakdowns
    - chart: one or more metric series bound to a date field
    """
    FORM = "form"
    TABLE = "table"
    SUMMARY = "summary"
    CHART = "chart"


class FilterOp(str, Enum):
    """
    Single-field predicate operators.

    eq/neq use loose scalar equality, in compares string forms against a list,
    gte/lte are numeric, contains is a case-insensitive substring test.
    """
    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    GTE = "gte"
    LTE = "lte"
    CONTAINS = "contains"


class MetricOp(str, Enum):
    """Aggregate operators. Every operator except count needs a fieldId."""
    SUM = "sum"
    COUNT = "count"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


class MetricFormat(str, Enum):
    """
    Display format for a metric value.

    Only affects presentation; aggregation is identical for every format.
    Percent values are already expressed in percent units (75 means 75%).
    """
    CURRENCY = "currency"
    NUMBER = "number"
    PERCENT = "percent"


class TimePreset(str, Enum):
    """Named time ranges resolved relative to a reference date."""
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"
    ALL_TIME = "all_time"


class SortDirection(str, Enum):
    """Sort direction for grouped metric rows."""
    ASC = "asc"
    DESC = "desc"


class ChartKind(str, Enum):
    """Chart presentation kinds. The runtime computes the same data for each."""
    LINE = "line"
    BAR = "bar"
    STACKED_BAR = "stacked_bar"
    PIE = "pie"


class ChartInterval(str, Enum):
    """
    Bucket width for chart time series.

    - day: one bucket per calendar day
    - week: ISO weeks, bucket keyed by the Monday
    - month: calendar months, bucket keyed by the first day
    """
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
