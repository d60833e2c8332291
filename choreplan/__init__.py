"""Chore scheduling for shared households.

Modules:
- config: load and validate configuration (JSON or YAML)
- errors: configuration and household-access errors
- domain: SQLAlchemy models, db helpers and repositories
- engine: recurrence, rotation assignment, overrides and completion reconciliation
- services: household-scoped queries, views and mutation entry points
- io: CSV import/export helpers
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "errors",
    "domain",
    "engine",
    "services",
    "io",
    "cli",
]
