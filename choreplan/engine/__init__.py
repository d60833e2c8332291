"""Chore scheduling engine: recurrence, assignment, overrides and reconciliation."""

from .assignment import resolve_assignee, validate_chore_rules
from .occurrences import Occurrence, ScheduleBuilder, ScheduleResult, calculate_chore_occurrences
from .overrides import Combination, Reassign, Reschedule, Skip, apply_override, build_override, index_overrides
from .reconcile import STATUS_DONE, STATUS_OVERDUE, STATUS_PENDING, STATUS_SKIPPED, classify, reconcile
from .recurrence import Recurrence, due_dates, is_nominal_date

__all__ = [
    "Recurrence",
    "due_dates",
    "is_nominal_date",
    "resolve_assignee",
    "validate_chore_rules",
    "Skip",
    "Reassign",
    "Reschedule",
    "Combination",
    "build_override",
    "apply_override",
    "index_overrides",
    "classify",
    "reconcile",
    "STATUS_DONE",
    "STATUS_PENDING",
    "STATUS_OVERDUE",
    "STATUS_SKIPPED",
    "Occurrence",
    "ScheduleResult",
    "ScheduleBuilder",
    "calculate_chore_occurrences",
]
