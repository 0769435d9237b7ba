"""
Declarative filter evaluation over record attribute bags.

Each filter tests one field of a record. A record passes a filter list only
when every filter matches; an empty or absent list keeps every record.

Operator Semantics:
- eq: loose equality. If either side is a boolean, both sides are compared
  by truthiness; otherwise their canonical strings are compared, so the
  number 5 equals the string "5". A missing value never matches.
- neq: logical negation of eq (a missing value therefore matches).
- in: the record value's canonical string against each candidate's
  canonical string; booleans read as "true"/"false". Missing never matches.
- gte / lte: the record value must coerce to a number. Non-numeric or
  missing values never match.
- contains: case-insensitive substring test on the canonical string; a
  missing value reads as "", so only an empty needle matches it.

The eq/neq rule is a UX convenience kept exactly as product behaviour, even
where it is not symmetric (e.g. "5.0" vs 5 compare as different strings).
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from recordforge.models import FilterSpec, StoredRecord
from recordforge.services.coercion import canonical_string, coerce_number

# Configure module logger
logger = logging.getLogger(__name__)


def _truthy(value: Any) -> bool:
    if isinstance(value, float) and value != value:
        return False
    return bool(value)


def loosely_equal(record_value: Any, filter_value: Any) -> bool:
    """Loose scalar equality used by eq/neq."""
    if record_value is None:
        return False
    if isinstance(record_value, bool) or isinstance(filter_value, bool):
        return _truthy(record_value) == _truthy(filter_value)
    return canonical_string(record_value) == canonical_string(filter_value)


def _match_eq(value: Any, flt: Any) -> bool:
    return loosely_equal(value, flt.value)


def _match_neq(value: Any, flt: Any) -> bool:
    return not loosely_equal(value, flt.value)


def _match_in(value: Any, flt: Any) -> bool:
    if value is None:
        return False
    needle = canonical_string(value)
    return any(canonical_string(candidate) == needle for candidate in flt.value)


def _match_gte(value: Any, flt: Any) -> bool:
    number = coerce_number(value)
    return number is not None and number >= flt.value


def _match_lte(value: Any, flt: Any) -> bool:
    number = coerce_number(value)
    return number is not None and number <= flt.value


def _match_contains(value: Any, flt: Any) -> bool:
    haystack = '' if value is None else canonical_string(value)
    return flt.value.lower() in haystack.lower()


_MATCHERS: Dict[str, Callable[[Any, Any], bool]] = {
    'eq': _match_eq,
    'neq': _match_neq,
    'in': _match_in,
    'gte': _match_gte,
    'lte': _match_lte,
    'contains': _match_contains,
}


def matches_filter(record: StoredRecord, flt: FilterSpec) -> bool:
    """
    Decide whether one record satisfies one filter.

    Raises:
        ValueError: If the filter carries an unknown operator tag.
    """
    matcher = _MATCHERS.get(flt.op)
    if matcher is None:
        raise ValueError(f"Unknown filter operator: {flt.op!r}")
    return matcher(record.data.get(flt.fieldId), flt)


def matches_all(record: StoredRecord, filters: Optional[Sequence[FilterSpec]]) -> bool:
    return all(matches_filter(record, flt) for flt in filters or [])


def apply_filters(
    records: Sequence[StoredRecord],
    filters: Optional[Sequence[FilterSpec]] = None,
) -> List[StoredRecord]:
    """
    Keep the records that match every filter.

    Args:
        records: Input records; never modified.
        filters: Filters to apply; None or empty keeps everything.

    Returns:
        A new list preserving input order.
    """
    if not filters:
        return list(records)

    kept = [r for r in records if matches_all(r, filters)]
    logger.debug(f"Applied {len(filters)} filter(s): kept {len(kept)}/{len(records)} records")
    return kept
