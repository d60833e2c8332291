"""Services for household-scoped queries and mutations."""

from .access import require_assignee, require_chore, require_membership
from .mutations import archive_chore, clear_override, record_completion, remove_completion, set_override
from .schedule import build_household_schedule
from .views import (
    audit_view,
    current_week_view,
    due_occurrences,
    summarize_occurrences,
    week_bounds,
    year_weeks,
    zone_matrix_view,
)

__all__ = [
    "require_membership",
    "require_chore",
    "require_assignee",
    "record_completion",
    "remove_completion",
    "set_override",
    "clear_override",
    "archive_chore",
    "build_household_schedule",
    "current_week_view",
    "audit_view",
    "due_occurrences",
    "summarize_occurrences",
    "week_bounds",
    "year_weeks",
    "zone_matrix_view",
]
