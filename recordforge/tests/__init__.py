'''
recordforge Test Suite

Test Modules:
-------------
- test_record_validation.py: per-type checks, missing/unknown keys, idempotence
- test_template_spec.py: authoring-time invariants and template validation details
- test_time_range.py: preset and explicit range resolution, date-window filtering
- test_filters.py: filter operator semantics and loose equality
- test_metrics.py: aggregation and degenerate-input policy
- test_grouping.py: partitioning, stable sorting and truncation
- test_view_runtime.py: summary/chart rendering pipeline and time series
- test_formatting.py: metric display formatting
- test_config.py: environment-driven settings
- test_api.py: HTTP endpoints (pytest-asyncio + httpx)

Running Tests:
--------------
    pip install -e ".[test]"
    pytest recordforge/tests -v

Configuration:
--------------
See conftest.py for shared fixtures and test configuration.
'''

__all__ = []
