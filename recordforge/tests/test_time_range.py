"""
Test Module for time range resolution and date-window filtering.

Validates:
- Preset boundaries (this_month, last_month, this_year, all_time)
- Explicit {from, to} inclusivity and unparseable bounds
- Calendar arithmetic across year boundaries
- apply_time_range inclusion/exclusion at interval edges
"""

from datetime import date, datetime, timezone

import pytest

from recordforge.models import ExplicitTimeRange, PresetTimeRange
from recordforge.services.time_range import (
    UNRESOLVED,
    add_months,
    apply_time_range,
    resolve_time_range,
)
from recordforge.tests.conftest import make_record


def _preset(name: str) -> PresetTimeRange:
    return PresetTimeRange(preset=name)


def _explicit(start: str, end: str) -> ExplicitTimeRange:
    return ExplicitTimeRange.model_validate({'from': start, 'to': end})


# =============================================================================
# Preset Resolution
# =============================================================================

class TestPresetResolution:

    def test_this_month(self, reference_date):
        assert resolve_time_range(_preset('this_month'), reference_date) == (
            date(2026, 1, 1), date(2026, 2, 1)
        )

    def test_last_month_crosses_year(self, reference_date):
        assert resolve_time_range(_preset('last_month'), reference_date) == (
            date(2025, 12, 1), date(2026, 1, 1)
        )

    def test_this_month_in_december(self):
        assert resolve_time_range(_preset('this_month'), date(2025, 12, 31)) == (
            date(2025, 12, 1), date(2026, 1, 1)
        )

    def test_this_year(self, reference_date):
        assert resolve_time_range(_preset('this_year'), reference_date) == (
            date(2026, 1, 1), date(2027, 1, 1)
        )

    def test_all_time_spans_full_range(self, reference_date):
        assert resolve_time_range(_preset('all_time'), reference_date) == (date.min, date.max)

    def test_datetime_now_uses_its_calendar_date(self):
        now = datetime(2026, 3, 31, 23, 59, tzinfo=timezone.utc)
        assert resolve_time_range(_preset('this_month'), now) == (
            date(2026, 3, 1), date(2026, 4, 1)
        )

    def test_rejects_non_range(self, reference_date):
        with pytest.raises(TypeError):
            resolve_time_range({'preset': 'this_month'}, reference_date)


class TestAddMonths:

    @pytest.mark.parametrize('day,months,expected', [
        (date(2025, 12, 15), 1, date(2026, 1, 1)),
        (date(2026, 1, 31), -1, date(2025, 12, 1)),
        (date(2026, 3, 31), -1, date(2026, 2, 1)),
        (date(2026, 1, 15), 12, date(2027, 1, 1)),
        (date(2026, 1, 15), -13, date(2024, 12, 1)),
    ])
    def test_add_months_lands_on_first_day(self, day, months, expected):
        assert add_months(day, months) == expected


# =============================================================================
# Explicit Bounds
# =============================================================================

class TestExplicitResolution:

    def test_to_is_inclusive(self, reference_date):
        assert resolve_time_range(_explicit('2026-01-01', '2026-01-03'), reference_date) == (
            date(2026, 1, 1), date(2026, 1, 4)
        )

    def test_month_end_rollover(self, reference_date):
        assert resolve_time_range(_explicit('2026-02-01', '2026-02-28'), reference_date)[1] == date(2026, 3, 1)

    @pytest.mark.parametrize('start,end', [
        ('yesterday', '2026-01-03'),
        ('2026-01-01', ''),
        ('2026-02-30', '2026-03-01'),
    ])
    def test_unparseable_bounds_are_unresolved(self, reference_date, start, end):
        assert resolve_time_range(_explicit(start, end), reference_date) == UNRESOLVED

    def test_iso_datetime_bounds_truncate_to_date(self, reference_date):
        assert resolve_time_range(
            _explicit('2026-01-01T08:00:00', '2026-01-02T22:00:00Z'), reference_date
        ) == (date(2026, 1, 1), date(2026, 1, 3))


# =============================================================================
# Applying Ranges to Records
# =============================================================================

class TestApplyTimeRange:

    def test_this_month_edges(self, reference_date):
        inside = make_record({'date': '2026-01-31'})
        first_day = make_record({'date': '2026-01-01'})
        outside = make_record({'date': '2026-02-01'})
        before = make_record({'date': '2025-12-31'})

        kept = apply_time_range([inside, first_day, outside, before], 'date', _preset('this_month'), reference_date)

        assert kept == [inside, first_day]

    def test_explicit_range_includes_to_date(self, reference_date):
        records = [make_record({'date': d}) for d in ('2026-01-01', '2026-01-03', '2026-01-04')]

        kept = apply_time_range(records, 'date', _explicit('2026-01-01', '2026-01-03'), reference_date)

        assert [r.data['date'] for r in kept] == ['2026-01-01', '2026-01-03']

    def test_records_without_date_excluded(self, reference_date):
        records = [make_record({}), make_record({'date': 'soon'}), make_record({'date': '2026-01-02'})]

        kept = apply_time_range(records, 'date', _preset('all_time'), reference_date)

        assert len(kept) == 1

    def test_iso_datetime_values_use_calendar_date(self, reference_date):
        late = make_record({'date': '2026-01-31T23:30:00Z'})

        kept = apply_time_range([late], 'date', _preset('this_month'), reference_date)

        assert kept == [late]

    def test_no_range_or_no_time_field_is_identity(self, expense_records, reference_date):
        assert apply_time_range(expense_records, 'date', None, reference_date) == expense_records
        assert apply_time_range(expense_records, None, _preset('this_month'), reference_date) == expense_records
        assert apply_time_range(expense_records, '  ', _preset('this_month'), reference_date) == expense_records

    def test_unresolved_range_applies_no_filtering(self, expense_records, reference_date):
        kept = apply_time_range(expense_records, 'date', _explicit('bad', 'worse'), reference_date)
        assert kept == expense_records

    def test_returns_new_list(self, expense_records, reference_date):
        kept = apply_time_range(expense_records, 'date', None, reference_date)
        assert kept is not expense_records
