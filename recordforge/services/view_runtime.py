"""
Read-path orchestration for template views.

A view render runs the analytics pipeline once over the caller's records:

    time range -> view filters -> metrics / grouped metrics / time series

Functions:
- get_default_view: the view marked default, else the first view
- resolve_table_columns: explicit table columns or every schema field
- select_grouping_metric: metric used for a summary group-by breakdown
- compute_time_series: bucket records by day/week/month and aggregate
- render_summary: metric cards plus group-by breakdowns for a summary view
- render_chart: per-series values, grouped rows or time series for a chart view

The effective time range is the one passed by the caller, else the view's
defaultTimeRange, else none. A summary view without a timeFieldId is never
time-filtered. Everything here is a pure function of its arguments.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple, Union

from recordforge.models import (
    ChartInterval,
    ChartResult,
    ChartView,
    FilterSpec,
    GroupBySpec,
    GroupedBreakdown,
    MetricSpec,
    MetricValue,
    SeriesResult,
    StoredRecord,
    SummaryResult,
    SummaryView,
    TableView,
    TemplateSchema,
    TemplateSpec,
    TimeRange,
    TimeSeriesPoint,
    ViewSpec,
)
from recordforge.services.filters import apply_filters
from recordforge.services.formatting import format_metric_value
from recordforge.services.grouping import EMPTY_GROUP_KEY, compute_grouped_metric
from recordforge.services.metrics import compute_metric
from recordforge.services.time_range import (
    UNRESOLVED,
    Interval,
    apply_time_range,
    record_date,
    resolve_time_range,
)

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# View Selection Helpers
# =============================================================================


def get_default_view(template: TemplateSpec) -> ViewSpec:
    """Return the view marked default, or the first view when none is marked."""
    for view in template.views:
        if view.default:
            return view
    return template.views[0]


def resolve_table_columns(schema: TemplateSchema, view: TableView) -> List[str]:
    """Explicit column ids in declared order, else every field id in schema order."""
    if view.columns:
        return list(view.columns)
    return schema.field_ids()


def select_grouping_metric(
    metrics: Sequence[MetricSpec],
    group_by: GroupBySpec,
) -> MetricSpec:
    """
    Pick the metric a summary breakdown is computed with.

    The metric named by group_by.sort.metricId wins; otherwise the first
    metric of the view is used.
    """
    if group_by.sort:
        for metric in metrics:
            if metric.id == group_by.sort.metricId:
                return metric
    return metrics[0]


def group_label(group_by: GroupBySpec, schema: Optional[TemplateSchema]) -> str:
    if group_by.label:
        return group_by.label
    if schema is not None:
        field = schema.get_field(group_by.fieldId)
        if field is not None and field.label:
            return field.label
    return group_by.fieldId


def effective_time_range(
    requested: Optional[TimeRange],
    view: Union[SummaryView, ChartView],
) -> Optional[TimeRange]:
    if requested is not None:
        return requested
    return view.defaultTimeRange


# =============================================================================
# Pipeline Steps
# =============================================================================


def _prefilter(
    records: Sequence[StoredRecord],
    time_field_id: Optional[str],
    time_range: Optional[TimeRange],
    filters: Optional[Sequence[FilterSpec]],
    now: Union[date, datetime],
) -> Tuple[List[StoredRecord], Interval]:
    """Apply the time range (when bound) and then view-level filters."""
    interval: Interval = UNRESOLVED
    scoped = list(records)

    if time_range is not None and time_field_id:
        interval = resolve_time_range(time_range, now)
        scoped = apply_time_range(scoped, time_field_id, time_range, now)

    scoped = apply_filters(scoped, filters)
    return scoped, interval


def bucket_start(day: date, interval: ChartInterval) -> date:
    """First calendar day of the bucket containing `day`."""
    if interval == ChartInterval.DAY:
        return day
    if interval == ChartInterval.WEEK:
        return day - timedelta(days=day.weekday())
    if interval == ChartInterval.MONTH:
        return day.replace(day=1)
    raise ValueError(f"Unknown chart interval: {interval!r}")


def compute_time_series(
    records: Sequence[StoredRecord],
    time_field_id: str,
    metric: MetricSpec,
    interval: ChartInterval,
) -> List[TimeSeriesPoint]:
    """
    Aggregate `metric` per time bucket, in chronological order.

    Records without a parseable date at `time_field_id` are left out. Only
    buckets that contain at least one record are emitted.
    """
    buckets: Dict[date, List[StoredRecord]] = {}
    for record in records:
        day = record_date(record, time_field_id)
        if day is None:
            continue
        buckets.setdefault(bucket_start(day, interval), []).append(record)

    return [
        TimeSeriesPoint(bucket=start, value=compute_metric(members, metric), count=len(members))
        for start, members in sorted(buckets.items())
    ]


# =============================================================================
# View Renderers
# =============================================================================


def render_summary(
    view: SummaryView,
    records: Sequence[StoredRecord],
    now: Union[date, datetime],
    time_range: Optional[TimeRange] = None,
    schema: Optional[TemplateSchema] = None,
    empty_key: str = EMPTY_GROUP_KEY,
    currency_symbol: str = "$",
) -> SummaryResult:
    """
    Compute every metric and group-by breakdown of a summary view.

    Args:
        view: Summary view specification.
        records: All records of the collection; never modified.
        now: Reference instant for preset time ranges.
        time_range: Caller-selected range; falls back to view.defaultTimeRange.
        schema: Used for group-by label fallbacks.
        empty_key: Partition key for records with no group value.
        currency_symbol: Prefix for currency-formatted metric displays.

    Returns:
        SummaryResult with record counts before and after filtering.
    """
    scoped, interval = _prefilter(
        records,
        view.timeFieldId,
        effective_time_range(time_range, view),
        view.filters,
        now,
    )

    metric_values = []
    for metric in view.metrics:
        value = compute_metric(scoped, metric)
        metric_values.append(MetricValue(
            metricId=metric.id,
            label=metric.label,
            format=metric.format,
            value=value,
            display=format_metric_value(value, metric.format, currency_symbol),
        ))

    groups = []
    for group_by in view.groupBys or []:
        metric = select_grouping_metric(view.metrics, group_by)
        groups.append(GroupedBreakdown(
            fieldId=group_by.fieldId,
            label=group_label(group_by, schema),
            metricId=metric.id,
            rows=compute_grouped_metric(scoped, group_by, metric, empty_key),
        ))

    logger.debug(
        f"Rendered summary '{view.id}': {len(scoped)}/{len(records)} records, "
        f"{len(metric_values)} metric(s), {len(groups)} breakdown(s)"
    )

    return SummaryResult(
        viewId=view.id,
        totalRecords=len(records),
        matchedRecords=len(scoped),
        rangeStart=interval[0],
        rangeEnd=interval[1],
        metrics=metric_values,
        groups=groups,
    )


def render_chart(
    view: ChartView,
    records: Sequence[StoredRecord],
    now: Union[date, datetime],
    time_range: Optional[TimeRange] = None,
    schema: Optional[TemplateSchema] = None,
    empty_key: str = EMPTY_GROUP_KEY,
) -> ChartResult:
    """
    Compute the data behind every series of a chart view.

    A series with a groupBy yields grouped rows; a series without one yields
    a single value, plus a chronological time series when the view declares
    an interval.
    """
    scoped, interval = _prefilter(
        records,
        view.timeFieldId,
        effective_time_range(time_range, view),
        view.filters,
        now,
    )

    series_results = []
    for index, series in enumerate(view.series):
        series_id = f"series-{index}"
        if series.groupBy:
            series_results.append(SeriesResult(
                id=series_id,
                kind="grouped",
                metric=series.metric,
                fieldLabel=group_label(series.groupBy, schema),
                rows=compute_grouped_metric(scoped, series.groupBy, series.metric, empty_key),
            ))
            continue

        points = None
        if view.interval is not None:
            points = compute_time_series(scoped, view.timeFieldId, series.metric, view.interval)
        series_results.append(SeriesResult(
            id=series_id,
            kind="single",
            metric=series.metric,
            value=compute_metric(scoped, series.metric),
            points=points,
        ))

    logger.debug(
        f"Rendered chart '{view.id}' ({view.chartKind.value}): "
        f"{len(scoped)}/{len(records)} records, {len(series_results)} series"
    )

    return ChartResult(
        viewId=view.id,
        chartKind=view.chartKind,
        interval=view.interval,
        totalRecords=len(records),
        matchedRecords=len(scoped),
        rangeStart=interval[0],
        rangeEnd=interval[1],
        series=series_results,
    )
