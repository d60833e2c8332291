"""Occurrence pipeline - recurrence, assignment, overrides and reconciliation for a window."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from choreplan.config import ChoreConfig
from choreplan.errors import ChoreConfigurationError

from .assignment import resolve_assignee, validate_chore_rules
from .overrides import Override, apply_override, index_overrides
from .reconcile import STATUS_OVERDUE, STATUS_PENDING, reconcile
from .recurrence import due_dates, is_nominal_date


@dataclass
class Occurrence:
    """One calculated instance of a recurring chore."""

    chore_id: str
    original_date: date  # Nominal date, key for overrides
    date: date  # Effective date (original or rescheduled)
    assignee_id: Optional[str]
    status: str
    completion: Optional[object] = None
    override: Optional[Override] = None

    @property
    def is_due(self) -> bool:
        """True for occurrences still waiting to be done."""
        return self.status in (STATUS_PENDING, STATUS_OVERDUE)


@dataclass
class ScheduleResult:
    """Occurrences for all healthy chores plus configuration errors keyed by chore id."""

    occurrences: List[Occurrence] = field(default_factory=list)
    chores: Dict[str, object] = field(default_factory=dict)
    errors: Dict[str, ChoreConfigurationError] = field(default_factory=dict)


def calculate_chore_occurrences(
    chore,
    overrides: Sequence,
    completions: Sequence,
    window_start: date,
    window_end: date,
    today: date,
    early_days: int | None = None,
    late_days: int | None = None,
) -> List[Occurrence]:
    """
    Calculate the effective occurrences of one chore whose effective date lies in the window.

    Args:
        chore: Chore row
        overrides: The chore's override rows
        completions: The chore's completion rows
        window_start: First day of the query window (inclusive)
        window_end: Last day of the query window (inclusive)
        today: Reference date for pending/overdue
        early_days: Completion window override before the due-date
        late_days: Completion window override after the due-date

    Returns:
        Occurrences sorted by effective date

    Raises:
        ChoreConfigurationError: If the chore's rules are invalid
    """
    if window_end < window_start:
        raise ValueError(f"Window end {window_end} is before window start {window_start}")
    validate_chore_rules(chore)

    frequency = chore.frequency_days
    indexed = index_overrides(overrides)
    originals = set(due_dates(chore.start_date, frequency, window_start, window_end, chore.end_date))

    # Nominal dates outside the window that were rescheduled into it
    for original_date, override in indexed.items():
        new_date = getattr(override, "new_date", None)
        if new_date is None or not window_start <= new_date <= window_end:
            continue
        if is_nominal_date(original_date, chore.start_date, frequency, chore.end_date):
            originals.add(original_date)

    slots = []
    for original_date in sorted(originals):
        assignee_id = resolve_assignee(chore, original_date)
        slot = apply_override(original_date, assignee_id, indexed.get(original_date))
        if window_start <= slot.date <= window_end:
            slots.append(slot)

    occurrences = [
        Occurrence(
            chore_id=chore.id,
            original_date=item.slot.original_date,
            date=item.slot.date,
            assignee_id=item.slot.assignee_id,
            status=item.status,
            completion=item.completion,
            override=item.slot.override,
        )
        for item in reconcile(slots, completions, today, frequency, early_days, late_days)
    ]
    occurrences.sort(key=lambda o: (o.date, o.original_date))
    return occurrences


class ScheduleBuilder:
    """
    Builds occurrences for many chores at once.

    A chore with invalid configuration contributes no occurrences; its error is
    reported in the result and the other chores are unaffected.
    """

    def __init__(self, today: date, cfg: ChoreConfig | None = None):
        self.today = today
        self.cfg = cfg or ChoreConfig()

    def check_window(self, window_start: date, window_end: date) -> None:
        """Reject inverted or oversized query windows."""
        if window_end < window_start:
            raise ValueError(f"Window end {window_end} is before window start {window_start}")
        span = (window_end - window_start).days + 1
        if span > self.cfg.max_window_days:
            raise ValueError(f"Query window of {span} days exceeds max_window_days={self.cfg.max_window_days}")

    def build(
        self,
        chores: Sequence,
        overrides: Sequence,
        completions: Sequence,
        window_start: date,
        window_end: date,
    ) -> ScheduleResult:
        self.check_window(window_start, window_end)

        overrides_by_chore = defaultdict(list)
        for row in overrides:
            overrides_by_chore[row.chore_id].append(row)
        completions_by_chore = defaultdict(list)
        for row in completions:
            completions_by_chore[row.chore_id].append(row)

        result = ScheduleResult()
        for chore in chores:
            result.chores[chore.id] = chore
            try:
                occurrences = calculate_chore_occurrences(
                    chore,
                    overrides_by_chore[chore.id],
                    completions_by_chore[chore.id],
                    window_start,
                    window_end,
                    self.today,
                    early_days=self.cfg.completion_early_days,
                    late_days=self.cfg.completion_late_days,
                )
            except ChoreConfigurationError as e:
                result.errors[chore.id] = e
                continue
            result.occurrences.extend(occurrences)

        result.occurrences.sort(key=lambda o: (o.date, o.chore_id, o.original_date))
        return result
