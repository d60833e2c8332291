"""Completion reconciler: classify effective occurrences against the completion log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from .overrides import EffectiveSlot

STATUS_DONE = "done"
STATUS_PENDING = "pending"
STATUS_OVERDUE = "overdue"
STATUS_SKIPPED = "skipped"
STATUSES = (STATUS_DONE, STATUS_PENDING, STATUS_OVERDUE, STATUS_SKIPPED)


@dataclass(frozen=True)
class Reconciled:
    slot: EffectiveSlot
    completion: Optional[object]
    status: str


def completion_window(
    frequency_days: int,
    early_days: int | None = None,
    late_days: int | None = None,
) -> Tuple[int, int]:
    """
    Days before and after the effective date in which a completion counts.

    By default the ``frequency_days`` calendar days around a due-date are split
    so that consecutive windows of an unmodified schedule never overlap or
    leave gaps: daily chores match the same day, weekly chores -3..+3 days.
    """
    if early_days is None:
        early_days = (frequency_days - 1) // 2
    if late_days is None:
        late_days = frequency_days - 1 - (frequency_days - 1) // 2
    return early_days, late_days


def classify(effective_date: date, today: date, skipped: bool, completion: Optional[object]) -> str:
    """Status precedence: skipped, done, overdue, pending."""
    if skipped:
        return STATUS_SKIPPED
    if completion is not None:
        return STATUS_DONE
    if effective_date < today:
        return STATUS_OVERDUE
    return STATUS_PENDING


def _completion_day(completion) -> date:
    return completion.completed_at.date()


def reconcile(
    slots: Sequence[EffectiveSlot],
    completions: Sequence,
    today: date,
    frequency_days: int,
    early_days: int | None = None,
    late_days: int | None = None,
) -> List[Reconciled]:
    """
    Match one chore's effective occurrences with its completions.

    A completion whose ``scheduled_for`` names an occurrence's original date is
    linked to that occurrence. Every other completion, oldest first, goes to the
    nearest non-skipped occurrence whose window contains its calendar date. If
    that occurrence already has a completion the newer one is left unmatched, so
    several records of one visit never mark two occurrences done.

    Args:
        slots: Effective occurrences of a single chore
        completions: Completion rows of the same chore
        today: Reference date for pending/overdue
        frequency_days: The chore's frequency, used to size the window
        early_days: Window override before the due-date
        late_days: Window override after the due-date

    Returns:
        One Reconciled entry per slot, in the input order
    """
    early, late = completion_window(frequency_days, early_days, late_days)
    ordered = sorted(completions, key=lambda c: c.completed_at)

    matched: Dict[int, object] = {}
    used: set[int] = set()

    # Explicit links by original date
    by_original = {slot.original_date: i for i, slot in enumerate(slots)}
    for completion in ordered:
        scheduled_for = getattr(completion, "scheduled_for", None)
        if scheduled_for is None:
            continue
        used.add(id(completion))
        i = by_original.get(scheduled_for)
        if i is not None and i not in matched:
            matched[i] = completion

    # Window matching for the rest: each completion counts for its nearest
    # eligible occurrence only, and is dropped if that one is already done.
    targets = [i for i, slot in enumerate(slots) if not slot.skipped]
    for completion in ordered:
        if id(completion) in used:
            continue
        day = _completion_day(completion)
        eligible = [
            i for i in targets
            if slots[i].date - timedelta(days=early) <= day <= slots[i].date + timedelta(days=late)
        ]
        if not eligible:
            continue
        nearest = min(abs((day - slots[i].date).days) for i in eligible)
        closest = [i for i in eligible if abs((day - slots[i].date).days) == nearest]
        open_slots = [i for i in closest if i not in matched]
        used.add(id(completion))
        if open_slots:
            matched[min(open_slots, key=lambda i: slots[i].date)] = completion

    results = []
    for i, slot in enumerate(slots):
        completion = matched.get(i)
        results.append(Reconciled(slot, completion, classify(slot.date, today, slot.skipped, completion)))
    return results
