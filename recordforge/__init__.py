"""
recordforge Package.

Schema-driven records: templates describe typed fields and views as data,
records are validated against them at runtime, and summary/chart views are
computed from the template description alone.

Subpackages:
    - api: FastAPI route handlers (stateless)
    - core: Configuration and dependencies
    - models: Pydantic template specifications, enums and result shapes
    - services: Record validation and the analytics runtime
"""

__version__ = "1.0.0"
