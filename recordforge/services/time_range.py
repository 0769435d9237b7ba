"""
Time range resolution for summary and chart views.

Converts a declarative TimeRange (named preset or explicit bounds) into a
concrete half-open calendar interval [start, end_exclusive), and applies it
to a record set through a view's date-field binding.

Presets (relative to the calendar date of `now`):
- all_time: [date.min, date.max)
- this_month: [first of month, first of next month)
- last_month: [first of previous month, first of month)
- this_year: [Jan 1, Jan 1 of next year)

Explicit bounds {from, to} resolve to [from, to + 1 day) so `to` is inclusive
for the caller. An unparseable bound resolves to (None, None), which callers
treat as "no time filtering" rather than an error.

All arithmetic is on datetime.date values: there is no time of day and no
timezone, so month and day boundaries cannot shift. The reference instant is
always passed in explicitly; nothing here reads the clock.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple, Union

from recordforge.models import (
    ExplicitTimeRange,
    PresetTimeRange,
    StoredRecord,
    TimePreset,
    TimeRange,
)
from recordforge.services.coercion import parse_date_value

# Configure module logger
logger = logging.getLogger(__name__)

Interval = Tuple[Optional[date], Optional[date]]

UNRESOLVED: Interval = (None, None)


# =============================================================================
# Calendar Helpers
# =============================================================================


def _as_date(now: Union[date, datetime]) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    """First day of the month `months` away from `day`'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def start_of_year(day: date) -> date:
    return date(day.year, 1, 1)


def _next_day(day: date) -> date:
    # date.max has no successor; the interval then stays open-ended
    if day == date.max:
        return date.max
    return day + timedelta(days=1)


# =============================================================================
# Resolution
# =============================================================================


def resolve_time_range(
    time_range: TimeRange,
    now: Union[date, datetime],
) -> Interval:
    """
    Resolve a TimeRange to a half-open [start, end_exclusive) interval.

    Args:
        time_range: Preset or explicit range.
        now: Reference instant; only its calendar date is used.

    Returns:
        (start, end_exclusive), or (None, None) when explicit bounds fail to parse.

    Example:
        >>> resolve_time_range(PresetTimeRange(preset="this_month"), date(2026, 1, 15))
        (datetime.date(2026, 1, 1), datetime.date(2026, 2, 1))
    """
    today = _as_date(now)

    if isinstance(time_range, ExplicitTimeRange):
        start = parse_date_value(time_range.from_)
        end = parse_date_value(time_range.to)
        if start is None or end is None:
            logger.debug(
                f"Unparseable time range bounds from={time_range.from_!r} to={time_range.to!r}"
            )
            return UNRESOLVED
        return start, _next_day(end)

    if isinstance(time_range, PresetTimeRange):
        preset = time_range.preset
        if preset == TimePreset.ALL_TIME:
            return date.min, date.max
        if preset == TimePreset.THIS_MONTH:
            return start_of_month(today), add_months(today, 1)
        if preset == TimePreset.LAST_MONTH:
            return add_months(today, -1), start_of_month(today)
        if preset == TimePreset.THIS_YEAR:
            return start_of_year(today), date(today.year + 1, 1, 1)
        raise ValueError(f"Unknown time range preset: {preset!r}")

    raise TypeError(
        f"time_range must be a PresetTimeRange or ExplicitTimeRange, got {type(time_range).__name__}"
    )


def in_interval(day: date, interval: Interval) -> bool:
    start, end_exclusive = interval
    if start is None or end_exclusive is None:
        return True
    return start <= day < end_exclusive


def record_date(record: StoredRecord, time_field_id: str) -> Optional[date]:
    """Calendar date stored at `time_field_id`, or None when absent/unparseable."""
    return parse_date_value(record.data.get(time_field_id))


def apply_time_range(
    records: Sequence[StoredRecord],
    time_field_id: Optional[str],
    time_range: Optional[TimeRange],
    now: Union[date, datetime],
) -> List[StoredRecord]:
    """
    Keep records whose time-field date falls inside the resolved interval.

    Without a range, without a time field binding, or when the range does not
    resolve, the input is returned unfiltered (as a new list). Records with a
    missing or unparseable date are excluded once filtering applies.
    """
    if time_range is None or not time_field_id or not time_field_id.strip():
        return list(records)

    interval = resolve_time_range(time_range, now)
    if interval == UNRESOLVED:
        return list(records)

    kept = []
    for record in records:
        day = record_date(record, time_field_id)
        if day is not None and in_interval(day, interval):
            kept.append(record)

    logger.debug(
        f"Time range [{interval[0]}, {interval[1]}) on '{time_field_id}' "
        f"kept {len(kept)}/{len(records)} records"
    )
    return kept
