"""
recordforge Services Module

This module contains the template runtime: record validation and the
analytics pipeline. Every service is a stateless, synchronous, pure function
of its inputs; none performs I/O.

Services:
- coercion: explicit scalar conversions shared by the other services
- record_validation: schema-driven record validation and normalization
- template_validation: authoring-time template checks as validation details
- time_range: time range resolution and date-window filtering
- filters: declarative filter evaluation
- metrics: metric aggregation
- grouping: grouped metric computation
- view_runtime: summary/chart view rendering pipeline
- formatting: metric display formatting
"""

# =============================================================================
# Coercion
# =============================================================================

from recordforge.services.coercion import (
    is_missing,
    coerce_number,
    coerce_boolean,
    parse_calendar_date,
    parse_date_value,
    canonical_string,
)

# =============================================================================
# Validation
# =============================================================================

from recordforge.services.record_validation import (
    validate_record,
    check_field_value,
    resolve_fields,
    STRUCTURAL_FIELD,
)
from recordforge.services.template_validation import validate_template

# =============================================================================
# Analytics Runtime
# =============================================================================

from recordforge.services.time_range import (
    resolve_time_range,
    apply_time_range,
    add_months,
    start_of_month,
    start_of_year,
)
from recordforge.services.filters import (
    matches_filter,
    matches_all,
    apply_filters,
    loosely_equal,
)
from recordforge.services.metrics import (
    compute_metric,
    numeric_values,
    aggregate,
)
from recordforge.services.grouping import (
    group_key,
    group_by_field,
    compute_grouped_metric,
    EMPTY_GROUP_KEY,
)
from recordforge.services.view_runtime import (
    get_default_view,
    resolve_table_columns,
    select_grouping_metric,
    bucket_start,
    compute_time_series,
    render_summary,
    render_chart,
)
from recordforge.services.formatting import format_metric_value

__all__ = [
    # ----- Coercion -----
    'is_missing',
    'coerce_number',
    'coerce_boolean',
    'parse_calendar_date',
    'parse_date_value',
    'canonical_string',
    # ----- Validation -----
    'validate_record',
    'check_field_value',
    'resolve_fields',
    'STRUCTURAL_FIELD',
    'validate_template',
    # ----- Time Range -----
    'resolve_time_range',
    'apply_time_range',
    'add_months',
    'start_of_month',
    'start_of_year',
    # ----- Filters -----
    'matches_filter',
    'matches_all',
    'apply_filters',
    'loosely_equal',
    # ----- Metrics -----
    'compute_metric',
    'numeric_values',
    'aggregate',
    # ----- Grouping -----
    'group_key',
    'group_by_field',
    'compute_grouped_metric',
    'EMPTY_GROUP_KEY',
    # ----- View Runtime -----
    'get_default_view',
    'resolve_table_columns',
    'select_grouping_metric',
    'bucket_start',
    'compute_time_series',
    'render_summary',
    'render_chart',
    # ----- Formatting -----
    'format_metric_value',
]
