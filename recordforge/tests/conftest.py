"""
Pytest Configuration and Shared Fixtures for recordforge Tests.

This module provides fixtures and configuration for all tests, supporting:
- Async HTTP tests with pytest-asyncio and httpx
- A representative expense template (fields + form/table/summary/chart views)
- A small record set spanning December 2025 to February 2026
- A fixed reference date so time-range presets are deterministic

Fixed reference date: 2026-01-15. Relative to it, `this_month` is
[2026-01-01, 2026-02-01) and contains records r1, r2, r3 and r6 below.

Sample records (amount / category):
    r1 2026-01-09  42.5  Food
    r2 2026-01-20  10    Transport
    r3 2026-01-31  7.5   Food
    r4 2026-02-01  100   Transport
    r5 2025-12-28  20    Food       reimbursed
    r6 2026-01-15  5     (no category)
"""

import copy
from datetime import date, datetime
from typing import Any, Dict, Generator, List, Optional

import pytest

from recordforge.core.config import get_settings
from recordforge.models import StoredRecord, TemplateSpec


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - api: Tests exercising the HTTP layer through the ASGI app
    - scenario: End-to-end scenarios crossing several services
    """
    config.addinivalue_line(
        'markers',
        'api: marks tests that exercise the HTTP layer'
    )
    config.addinivalue_line(
        'markers',
        'scenario: marks end-to-end scenarios crossing several services'
    )


# ============================================================
# HELPERS
# ============================================================

REFERENCE_DATE = date(2026, 1, 15)

EXPENSE_TEMPLATE: Dict[str, Any] = {
    'name': 'Expenses',
    'schema': {
        'fields': [
            {'id': 'date', 'label': 'Date', 'type': 'date', 'required': True},
            {'id': 'amount', 'label': 'Amount', 'type': 'number', 'min': 0, 'required': True},
            {'id': 'category', 'label': 'Category', 'type': 'select', 'options': ['Food', 'Transport']},
            {'id': 'note', 'label': 'Note', 'type': 'string'},
            {'id': 'reimbursed', 'label': 'Reimbursed', 'type': 'boolean'},
        ],
        'indexes': [['date'], ['category']],
    },
    'views': [
        {'id': 'entry', 'type': 'form', 'default': True},
        {'id': 'ledger', 'type': 'table', 'columns': ['date', 'amount', 'category']},
        {
            'id': 'overview',
            'type': 'summary',
            'timeFieldId': 'date',
            'metrics': [
                {'id': 'total', 'label': 'Total spent', 'op': 'sum', 'fieldId': 'amount', 'format': 'currency'},
                {'id': 'entries', 'label': 'Entries', 'op': 'count'},
                {'id': 'average', 'label': 'Average', 'op': 'avg', 'fieldId': 'amount'},
            ],
            'groupBys': [
                {'fieldId': 'category', 'sort': {'metricId': 'total', 'dir': 'desc'}},
            ],
        },
        {
            'id': 'trend',
            'type': 'chart',
            'timeFieldId': 'date',
            'chartKind': 'line',
            'interval': 'month',
            'series': [
                {'metric': {'id': 'spend', 'label': 'Spend', 'op': 'sum', 'fieldId': 'amount'}},
                {
                    'metric': {'id': 'per_category', 'label': 'Entries', 'op': 'count'},
                    'groupBy': {'fieldId': 'category', 'label': 'By category'},
                },
            ],
        },
    ],
}


def make_record(
    data: Dict[str, Any],
    record_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> StoredRecord:
    """
    Build a StoredRecord for runtime tests.

    Usage:
        record = make_record({'amount': 5, 'category': 'Food'})
    """
    return StoredRecord(id=record_id, data=data, createdAt=created_at)


def expense_template_payload() -> Dict[str, Any]:
    """Deep copy of the expense template document, safe to mutate per test."""
    return copy.deepcopy(EXPENSE_TEMPLATE)


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def reference_date() -> date:
    """Fixed 'now' for time-range resolution: 2026-01-15."""
    return REFERENCE_DATE


@pytest.fixture
def template_payload() -> Dict[str, Any]:
    """Raw expense template document."""
    return expense_template_payload()


@pytest.fixture
def expense_template(template_payload: Dict[str, Any]) -> TemplateSpec:
    """Parsed expense template."""
    return TemplateSpec.model_validate(template_payload)


@pytest.fixture
def expense_records() -> List[StoredRecord]:
    """Six expense records spanning Dec 2025 to Feb 2026 (see module docstring)."""
    return [
        make_record({'date': '2026-01-09', 'amount': 42.5, 'category': 'Food'}, 'r1'),
        make_record({'date': '2026-01-20', 'amount': 10, 'category': 'Transport'}, 'r2'),
        make_record({'date': '2026-01-31', 'amount': 7.5, 'category': 'Food'}, 'r3'),
        make_record({'date': '2026-02-01', 'amount': 100, 'category': 'Transport'}, 'r4'),
        make_record({'date': '2025-12-28', 'amount': 20, 'category': 'Food', 'reimbursed': True}, 'r5'),
        make_record({'date': '2026-01-15', 'amount': 5}, 'r6'),
    ]


@pytest.fixture
def clear_settings_cache() -> Generator[None, None, None]:
    """
    Reset the cached Settings before and after a test.

    Usage:
        def test_env_override(monkeypatch, clear_settings_cache):
            monkeypatch.setenv('RECORDFORGE_EMPTY_GROUP_KEY', 'n/a')
            assert get_settings().empty_group_key == 'n/a'
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
