"""
Grouped metric computation.

Partitions records by the canonical string of a field's value, computes a
metric per partition, then sorts and truncates the rows.

- Partitioning is total: every record lands in exactly one partition.
  Missing or empty values share the "(empty)" partition (configurable).
- value is the metric over the partition, with metric-local filters still
  applied inside the partition; count is the raw partition size.
- Rows sort by value, descending unless groupBy.sort.dir says otherwise.
  The sort is stable, so equal values keep first-seen key order.
- groupBy.limit truncates after sorting.
"""

import logging
from typing import Dict, List, Optional, Sequence

from recordforge.models import (
    GroupBySpec,
    GroupedMetricRow,
    MetricSpec,
    SortDirection,
    StoredRecord,
)
from recordforge.services.coercion import canonical_string, is_missing
from recordforge.services.metrics import compute_metric

# Configure module logger
logger = logging.getLogger(__name__)

EMPTY_GROUP_KEY = '(empty)'


def group_key(value: object, empty_key: str = EMPTY_GROUP_KEY) -> str:
    """Canonical partition key for a raw field value."""
    if is_missing(value):
        return empty_key
    return canonical_string(value)


def group_by_field(
    records: Sequence[StoredRecord],
    field_id: str,
    empty_key: str = EMPTY_GROUP_KEY,
) -> Dict[str, List[StoredRecord]]:
    """
    Partition records by field value.

    Returns:
        Mapping of key to records, in first-seen key order.
    """
    partitions: Dict[str, List[StoredRecord]] = {}
    for record in records:
        key = group_key(record.data.get(field_id), empty_key)
        partitions.setdefault(key, []).append(record)
    return partitions


def compute_grouped_metric(
    records: Sequence[StoredRecord],
    group_by: GroupBySpec,
    metric: MetricSpec,
    empty_key: Optional[str] = None,
) -> List[GroupedMetricRow]:
    """
    Compute `metric` per partition of `group_by.fieldId`.

    Args:
        records: Records to partition; never modified.
        group_by: Partition field, optional sort direction and limit.
        metric: Metric computed for each partition.
        empty_key: Override for the missing-value partition key.

    Returns:
        Ordered rows of {key, value, count}.
    """
    partitions = group_by_field(
        records,
        group_by.fieldId,
        empty_key if empty_key is not None else EMPTY_GROUP_KEY,
    )

    rows = [
        GroupedMetricRow(key=key, value=compute_metric(members, metric), count=len(members))
        for key, members in partitions.items()
    ]

    direction = group_by.sort.dir if group_by.sort else SortDirection.DESC
    rows.sort(key=lambda row: row.value, reverse=direction == SortDirection.DESC)

    if group_by.limit:
        rows = rows[:group_by.limit]

    logger.debug(
        f"Grouped {len(records)} records by '{group_by.fieldId}' into "
        f"{len(partitions)} partition(s), returning {len(rows)}"
    )
    return rows
