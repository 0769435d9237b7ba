"""
Package initialization file for recordforge models.

This module exports all Pydantic schemas and enumerations from schemas.py and
enums.py, making them importable from recordforge.models directly.

Usage:
    from recordforge.models import (
        TemplateSpec,
        MetricSpec,
        StoredRecord,
        FieldType,
        # ... etc
    )
"""

# =============================================================================
# Enums
# =============================================================================

from recordforge.models.enums import (
    FieldType,
    ViewType,
    FilterOp,
    MetricOp,
    MetricFormat,
    TimePreset,
    SortDirection,
    ChartKind,
    ChartInterval,
)

# =============================================================================
# Schemas
# =============================================================================

from recordforge.models.schemas import (
    # Value unions
    Scalar,
    InValue,
    # Fields
    StringField,
    NumberField,
    BooleanField,
    DateField,
    SelectField,
    FieldSpec,
    # Time ranges
    PresetTimeRange,
    ExplicitTimeRange,
    TimeRange,
    # Filters
    EqFilter,
    NeqFilter,
    InFilter,
    GteFilter,
    LteFilter,
    ContainsFilter,
    FilterSpec,
    # Metrics and grouping
    MetricSpec,
    GroupSort,
    GroupBySpec,
    # Views
    FormView,
    TableView,
    SummaryView,
    ChartSeries,
    ChartView,
    ViewSpec,
    # Templates
    TemplateSchema,
    TemplateSpec,
    # Records
    StoredRecord,
    # Validation results
    ValidationDetail,
    RecordValidationSuccess,
    RecordValidationFailure,
    RecordValidationResult,
    # Analytics results
    GroupedMetricRow,
    MetricValue,
    GroupedBreakdown,
    TimeSeriesPoint,
    SeriesResult,
    SummaryResult,
    ChartResult,
)

__all__ = [
    # ----- Enums -----
    'FieldType',
    'ViewType',
    'FilterOp',
    'MetricOp',
    'MetricFormat',
    'TimePreset',
    'SortDirection',
    'ChartKind',
    'ChartInterval',
    # ----- Value unions -----
    'Scalar',
    'InValue',
    # ----- Fields -----
    'StringField',
    'NumberField',
    'BooleanField',
    'DateField',
    'SelectField',
    'FieldSpec',
    # ----- Time ranges -----
    'PresetTimeRange',
    'ExplicitTimeRange',
    'TimeRange',
    # ----- Filters -----
    'EqFilter',
    'NeqFilter',
    'InFilter',
    'GteFilter',
    'LteFilter',
    'ContainsFilter',
    'FilterSpec',
    # ----- Metrics and grouping -----
    'MetricSpec',
    'GroupSort',
    'GroupBySpec',
    # ----- Views -----
    'FormView',
    'TableView',
    'SummaryView',
    'ChartSeries',
    'ChartView',
    'ViewSpec',
    # ----- Templates -----
    'TemplateSchema',
    'TemplateSpec',
    # ----- Records -----
    'StoredRecord',
    # ----- Validation results -----
    'ValidationDetail',
    'RecordValidationSuccess',
    'RecordValidationFailure',
    'RecordValidationResult',
    # ----- Analytics results -----
    'GroupedMetricRow',
    'MetricValue',
    'GroupedBreakdown',
    'TimeSeriesPoint',
    'SeriesResult',
    'SummaryResult',
    'ChartResult',
]
