"""
Metric aggregation over record sets.

compute_metric narrows the records with the metric's own filters (if any)
and then aggregates:

- count: number of records left, regardless of fieldId
- sum / avg / min / max: over the numeric values of metric.fieldId; records
  whose value is missing or not numeric are skipped
- avg divides by the number of numeric values, not the number of records

Degenerate inputs resolve to 0 instead of NaN or an error: no numeric
values, a missing fieldId, or an aggregate that overflows to infinity. The
returned value is therefore always finite.
"""

import logging
import math
from typing import List, Sequence, Union

from recordforge.models import MetricOp, MetricSpec, StoredRecord
from recordforge.services.coercion import coerce_number
from recordforge.services.filters import apply_filters

# Configure module logger
logger = logging.getLogger(__name__)

Number = Union[int, float]


def numeric_values(records: Sequence[StoredRecord], field_id: str) -> List[Number]:
    """Numeric values stored at `field_id`, skipping missing/non-numeric ones."""
    values: List[Number] = []
    for record in records:
        number = coerce_number(record.data.get(field_id))
        if number is not None:
            values.append(number)
    return values


def _finite_or_zero(value: Number) -> Number:
    try:
        finite = math.isfinite(float(value))
    except OverflowError:
        finite = False
    return value if finite else 0


def aggregate(op: MetricOp, values: Sequence[Number]) -> Number:
    """
    Reduce numeric values with a non-count operator.

    Raises:
        ValueError: If `op` is not an aggregate over values.
    """
    if not values:
        return 0

    if op == MetricOp.SUM:
        result = _sum(values)
    elif op == MetricOp.AVG:
        try:
            result = _sum(values) / len(values)
        except OverflowError:
            return 0
    elif op == MetricOp.MIN:
        result = min(values)
    elif op == MetricOp.MAX:
        result = max(values)
    else:
        raise ValueError(f"Unsupported aggregate operator: {op!r}")

    return _finite_or_zero(result)


def _sum(values: Sequence[Number]) -> Number:
    if all(isinstance(v, int) for v in values):
        return sum(values)
    try:
        return math.fsum(values)
    except OverflowError:
        return math.inf


def compute_metric(records: Sequence[StoredRecord], metric: MetricSpec) -> Number:
    """
    Compute one metric over a record set.

    Args:
        records: Records to aggregate; never modified.
        metric: Metric descriptor; metric.filters are applied first.

    Returns:
        A finite number; 0 when nothing numeric remains.

    Example:
        >>> compute_metric([], MetricSpec(id="a", label="Avg", op="avg", fieldId="amount"))
        0
    """
    scoped = apply_filters(records, metric.filters) if metric.filters else records

    if metric.op == MetricOp.COUNT:
        return len(scoped)

    if not metric.fieldId:
        return 0

    values = numeric_values(scoped, metric.fieldId)
    result = aggregate(metric.op, values)
    logger.debug(
        f"Metric '{metric.id}' {metric.op.value}({metric.fieldId}) over "
        f"{len(values)} numeric value(s) = {result}"
    )
    return result
