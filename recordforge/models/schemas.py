"""
Pydantic models for recordforge template specifications and runtime results.

A template is data, not code: its schema lists typed fields, and its views
describe how records are presented and aggregated. This module defines:

- Field variants discriminated by `type` (string, number, boolean, date, select)
- Filter variants discriminated by `op` (eq, neq, in, gte, lte, contains)
- Metric, GroupBy and TimeRange descriptors
- View variants discriminated by `type` (form, table, summary, chart)
- TemplateSchema / TemplateSpec with authoring-time invariants
- StoredRecord, the attribute bag the analytics runtime consumes
- Result shapes for record validation and view rendering

Template models are frozen: once loaded for a computation they are read-only.
Authoring-time invariant violations (duplicate ids, select without options,
a non-count metric without fieldId, dangling field references) raise
pydantic.ValidationError at construction time.

All models use Pydantic v2 syntax. Attribute names mirror the camelCase keys
stored in template documents.
"""

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

from recordforge.models.enums import (
    ChartInterval,
    ChartKind,
    FieldType,
    MetricFormat,
    MetricOp,
    SortDirection,
    TimePreset,
    ViewType,
)


# Scalar value carried by attribute bags and eq/neq filters.
# Strict types keep "5" a string and True a boolean during model validation.
Scalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

# Candidate values for the `in` operator
InValue = Union[StrictInt, StrictFloat, StrictStr]


class _SpecModel(BaseModel):
    """Base for all template specification models (immutable, by-name population)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# =============================================================================
# Field Variants
# =============================================================================


class _FieldBase(_SpecModel):
    id: str = Field(
        ...,
        min_length=1,
        description="Attribute-bag key; unique within a schema"
    )
    label: Optional[str] = Field(
        default=None,
        description="Display text; validation messages fall back to the id"
    )
    required: bool = Field(
        default=False,
        description="Whether a record must carry a non-empty value"
    )

    @property
    def display_name(self) -> str:
        return self.label or self.id


class StringField(_FieldBase):
    """Free-text field. Values must already be strings."""
    type: Literal["string"] = FieldType.STRING.value


class NumberField(_FieldBase):
    """
    Numeric field with optional inclusive bounds.

    Numeric strings are accepted and coerced during record validation.
    """
    type: Literal["number"] = FieldType.NUMBER.value
    min: Optional[float] = Field(
        default=None,
        description="Inclusive lower bound"
    )
    max: Optional[float] = Field(
        default=None,
        description="Inclusive upper bound"
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "NumberField":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(
                f"field '{self.id}': min ({self.min}) must be <= max ({self.max})"
            )
        return self


class BooleanField(_FieldBase):
    """True/false field. The exact strings "true" and "false" are accepted."""
    type: Literal["boolean"] = FieldType.BOOLEAN.value


class DateField(_FieldBase):
    """Calendar date field stored as a YYYY-MM-DD string."""
    type: Literal["date"] = FieldType.DATE.value


class SelectField(_FieldBase):
    """Single choice among a non-empty ordered list of string options."""
    type: Literal["select"] = FieldType.SELECT.value
    options: List[str] = Field(
        ...,
        min_length=1,
        description="Allowed values, in display order"
    )


FieldSpec = Annotated[
    Union[StringField, NumberField, BooleanField, DateField, SelectField],
    Field(discriminator="type"),
]


# =============================================================================
# Time Range
# =============================================================================


class PresetTimeRange(_SpecModel):
    """Named range resolved relative to a reference date."""
    preset: TimePreset


class ExplicitTimeRange(_SpecModel):
    """
    Explicit calendar bounds, both inclusive from the caller's perspective.

    Bounds are kept as raw strings: an unparseable bound means "no filtering"
    at resolution time rather than a rejected request.
    """
    from_: str = Field(..., alias="from")
    to: str


TimeRange = Union[PresetTimeRange, ExplicitTimeRange]


# =============================================================================
# Filter Variants
# =============================================================================


class _FilterBase(_SpecModel):
    fieldId: str = Field(
        ...,
        min_length=1,
        description="Field whose record value is tested"
    )


class EqFilter(_FilterBase):
    op: Literal["eq"] = "eq"
    value: Scalar


class NeqFilter(_FilterBase):
    op: Literal["neq"] = "neq"
    value: Scalar


class InFilter(_FilterBase):
    op: Literal["in"] = "in"
    value: List[InValue]


class GteFilter(_FilterBase):
    op: Literal["gte"] = "gte"
    value: float


class LteFilter(_FilterBase):
    op: Literal["lte"] = "lte"
    value: float


class ContainsFilter(_FilterBase):
    op: Literal["contains"] = "contains"
    value: str


FilterSpec = Annotated[
    Union[EqFilter, NeqFilter, InFilter, GteFilter, LteFilter, ContainsFilter],
    Field(discriminator="op"),
]


# =============================================================================
# Metric and GroupBy
# =============================================================================


class MetricSpec(_SpecModel):
    """
    Declarative aggregate over a record set.

    `fieldId` is required for every operator except count. Metric-local
    filters narrow the record set before aggregation. `format` only affects
    display.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "total_spent",
                "label": "Total spent",
                "op": "sum",
                "fieldId": "amount",
                "format": "currency",
            }
        },
    )

    id: str = Field(..., min_length=1)
    label: str
    op: MetricOp
    fieldId: Optional[str] = Field(
        default=None,
        description="Aggregated field; required unless op is count"
    )
    format: Optional[MetricFormat] = None
    filters: Optional[List[FilterSpec]] = None

    @model_validator(mode="after")
    def _require_field_for_op(self) -> "MetricSpec":
        if self.op != MetricOp.COUNT and (not self.fieldId or not self.fieldId.strip()):
            raise ValueError(
                f'metric.fieldId is required when op is "{self.op.value}"'
            )
        return self


class GroupSort(_SpecModel):
    metricId: str
    dir: SortDirection = SortDirection.DESC


class GroupBySpec(_SpecModel):
    """Partitioning key for grouped metrics, with optional sort and limit."""
    fieldId: str = Field(..., min_length=1)
    label: Optional[str] = None
    limit: Optional[PositiveInt] = Field(
        default=None,
        description="Keep at most this many rows after sorting"
    )
    sort: Optional[GroupSort] = None


# =============================================================================
# View Variants
# =============================================================================


class _ViewBase(_SpecModel):
    id: str = Field(..., min_length=1)
    default: bool = False


class FormView(_ViewBase):
    type: Literal["form"] = ViewType.FORM.value


class TableView(_ViewBase):
    type: Literal["table"] = ViewType.TABLE.value
    columns: Optional[List[str]] = Field(
        default=None,
        description="Explicit column field ids; all fields when omitted"
    )


class SummaryView(_ViewBase):
    type: Literal["summary"] = ViewType.SUMMARY.value
    timeFieldId: Optional[str] = None
    defaultTimeRange: Optional[TimeRange] = None
    metrics: List[MetricSpec] = Field(..., min_length=1)
    groupBys: Optional[List[GroupBySpec]] = None
    filters: Optional[List[FilterSpec]] = None


class ChartSeries(_SpecModel):
    metric: MetricSpec
    groupBy: Optional[GroupBySpec] = None


class ChartView(_ViewBase):
    type: Literal["chart"] = ViewType.CHART.value
    timeFieldId: str = Field(..., min_length=1)
    defaultTimeRange: Optional[TimeRange] = None
    interval: Optional[ChartInterval] = None
    chartKind: ChartKind
    series: List[ChartSeries] = Field(..., min_length=1)
    filters: Optional[List[FilterSpec]] = None


ViewSpec = Annotated[
    Union[FormView, TableView, SummaryView, ChartView],
    Field(discriminator="type"),
]


# =============================================================================
# Template Schema and Specification
# =============================================================================


class TemplateSchema(_SpecModel):
    """
    Ordered, non-empty field list plus optional index hints.

    Index hints are consumed by storage only; the runtime ignores them.
    """
    fields: List[FieldSpec] = Field(..., min_length=1)
    indexes: Optional[List[List[str]]] = None

    @model_validator(mode="after")
    def _check_unique_field_ids(self) -> "TemplateSchema":
        seen = set()
        for f in self.fields:
            if f.id in seen:
                raise ValueError(f"duplicate field id '{f.id}'")
            seen.add(f.id)
        return self

    def field_ids(self) -> List[str]:
        return [f.id for f in self.fields]

    def get_field(self, field_id: str) -> Optional[FieldSpec]:
        for f in self.fields:
            if f.id == field_id:
                return f
        return None


def _view_field_references(view: Any) -> List[str]:
    """Collect every field id a view refers to, in declaration order."""
    refs: List[str] = []

    def add_filters(filters: Optional[List[Any]]) -> None:
        for flt in filters or []:
            refs.append(flt.fieldId)

    def add_metric(metric: MetricSpec) -> None:
        if metric.fieldId:
            refs.append(metric.fieldId)
        add_filters(metric.filters)

    if isinstance(view, TableView):
        refs.extend(view.columns or [])
    elif isinstance(view, SummaryView):
        if view.timeFieldId:
            refs.append(view.timeFieldId)
        for metric in view.metrics:
            add_metric(metric)
        for group_by in view.groupBys or []:
            refs.append(group_by.fieldId)
        add_filters(view.filters)
    elif isinstance(view, ChartView):
        refs.append(view.timeFieldId)
        for series in view.series:
            add_metric(series.metric)
            if series.groupBy:
                refs.append(series.groupBy.fieldId)
        add_filters(view.filters)
    return refs


class TemplateSpec(_SpecModel):
    """
    Complete template: a name, a schema and at least one view.

    Invariants checked at construction:
    - view ids are unique
    - at most one view is marked default
    - every field id referenced by a view exists in the schema
    - a view's timeFieldId refers to a date field
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Expenses",
                "schema": {
                    "fields": [
                        {"id": "date", "label": "Date", "type": "date", "required": True},
                        {"id": "amount", "label": "Amount", "type": "number", "min": 0, "required": True},
                        {"id": "category", "label": "Category", "type": "select", "options": ["Food", "Transport"]},
                    ]
                },
                "views": [
                    {"id": "entry", "type": "form", "default": True},
                    {
                        "id": "overview",
                        "type": "summary",
                        "timeFieldId": "date",
                        "metrics": [{"id": "total", "label": "Total", "op": "sum", "fieldId": "amount"}],
                    },
                ],
            }
        },
    )

    name: str
    schema_: TemplateSchema = Field(..., alias="schema")
    views: List[ViewSpec] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_views(self) -> "TemplateSpec":
        seen = set()
        defaults = []
        for view in self.views:
            if view.id in seen:
                raise ValueError(f"duplicate view id '{view.id}'")
            seen.add(view.id)
            if view.default:
                defaults.append(view.id)
        if len(defaults) > 1:
            raise ValueError(
                f"only one view may be marked default, got: {', '.join(defaults)}"
            )

        known = set(self.schema_.field_ids())
        for view in self.views:
            for ref in _view_field_references(view):
                if ref not in known:
                    raise ValueError(
                        f"view '{view.id}' references unknown field '{ref}'"
                    )
            time_field_id = getattr(view, "timeFieldId", None)
            if time_field_id:
                time_field = self.schema_.get_field(time_field_id)
                if time_field is not None and time_field.type != FieldType.DATE.value:
                    raise ValueError(
                        f"view '{view.id}' timeFieldId '{time_field_id}' must reference a date field"
                    )
        return self

    def get_view(self, view_id: str) -> Optional[ViewSpec]:
        for view in self.views:
            if view.id == view_id:
                return view
        return None


# =============================================================================
# Records
# =============================================================================


class StoredRecord(BaseModel):
    """
    One record as consumed by the analytics runtime.

    `data` is the attribute bag keyed by field id. Records handed to the
    runtime are normally already validated, but the runtime tolerates any
    value shape and treats unusable values as missing.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "rec_001",
                "data": {"date": "2026-01-09", "amount": 42.5, "category": "Food"},
                "createdAt": "2026-01-09T18:30:00Z",
            }
        }
    )

    id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    createdAt: Optional[datetime] = None


# =============================================================================
# Validation Results
# =============================================================================


class ValidationDetail(BaseModel):
    """One validation problem: the offending field (or "_") and a message."""
    field: str = Field(
        ...,
        description="Field id, dotted template path, or '_' for structural errors"
    )
    message: str


class RecordValidationSuccess(BaseModel):
    ok: Literal[True] = True
    data: Dict[str, Scalar] = Field(default_factory=dict)


class RecordValidationFailure(BaseModel):
    ok: Literal[False] = False
    details: List[ValidationDetail] = Field(default_factory=list)


RecordValidationResult = Union[RecordValidationSuccess, RecordValidationFailure]


# =============================================================================
# Analytics Results
# =============================================================================


class GroupedMetricRow(BaseModel):
    """Aggregate for one partition. `count` is the raw partition size."""
    key: str
    value: float
    count: int = Field(..., ge=0)


class MetricValue(BaseModel):
    metricId: str
    label: str
    format: Optional[MetricFormat] = None
    value: float
    display: Optional[str] = Field(
        default=None,
        description="Value rendered according to format"
    )


class GroupedBreakdown(BaseModel):
    fieldId: str
    label: str
    metricId: str
    rows: List[GroupedMetricRow] = Field(default_factory=list)


class TimeSeriesPoint(BaseModel):
    bucket: date = Field(..., description="First calendar day of the bucket")
    value: float
    count: int = Field(..., ge=0)


class SeriesResult(BaseModel):
    """
    Computed data for one chart series.

    Grouped series carry `rows`; ungrouped series carry `value`, and `points`
    when the chart declares an interval.
    """
    id: str
    kind: Literal["single", "grouped"]
    metric: MetricSpec
    fieldLabel: Optional[str] = None
    value: Optional[float] = None
    rows: Optional[List[GroupedMetricRow]] = None
    points: Optional[List[TimeSeriesPoint]] = None


class SummaryResult(BaseModel):
    viewId: str
    totalRecords: int = Field(..., ge=0)
    matchedRecords: int = Field(..., ge=0)
    rangeStart: Optional[date] = None
    rangeEnd: Optional[date] = Field(
        default=None,
        description="Exclusive end of the applied interval"
    )
    metrics: List[MetricValue] = Field(default_factory=list)
    groups: List[GroupedBreakdown] = Field(default_factory=list)


class ChartResult(BaseModel):
    viewId: str
    chartKind: ChartKind
    interval: Optional[ChartInterval] = None
    totalRecords: int = Field(..., ge=0)
    matchedRecords: int = Field(..., ge=0)
    rangeStart: Optional[date] = None
    rangeEnd: Optional[date] = None
    series: List[SeriesResult] = Field(default_factory=list)
