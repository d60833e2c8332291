"""Override applier: turn nominal (date, assignee) pairs into the effective schedule.

Persisted override rows carry nullable fields in any combination; they are
converted once into one of four explicit variants so the applier never has
to interpret ambiguous null states:

- ``Skip``: the occurrence is kept for audit but not due
- ``Reassign``: someone else is responsible
- ``Reschedule``: the occurrence moves to another date
- ``Combination``: reassigned and rescheduled
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Union


@dataclass(frozen=True)
class Skip:
    original_date: date


@dataclass(frozen=True)
class Reassign:
    original_date: date
    new_assignee_id: str


@dataclass(frozen=True)
class Reschedule:
    original_date: date
    new_date: date


@dataclass(frozen=True)
class Combination:
    original_date: date
    new_assignee_id: str
    new_date: date


Override = Union[Skip, Reassign, Reschedule, Combination]


@dataclass(frozen=True)
class EffectiveSlot:
    """Result of applying an override to one nominal occurrence."""

    original_date: date
    date: date
    assignee_id: Optional[str]
    skipped: bool
    override: Optional[Override] = None


def build_override(
    original_date: date,
    skipped: bool = False,
    new_assignee_id: str | None = None,
    new_date: date | None = None,
) -> Optional[Override]:
    """Pick the variant matching the given fields; None when nothing is overridden."""
    if skipped:
        return Skip(original_date)
    if new_assignee_id and new_date is not None:
        return Combination(original_date, new_assignee_id, new_date)
    if new_assignee_id:
        return Reassign(original_date, new_assignee_id)
    if new_date is not None:
        return Reschedule(original_date, new_date)
    return None


def override_from_row(row) -> Optional[Override]:
    """Convert a ChoreOverride row into its variant."""
    return build_override(
        row.original_date,
        skipped=bool(row.is_skipped),
        new_assignee_id=row.new_assignee_id,
        new_date=row.new_date,
    )


def index_overrides(rows: Iterable) -> Dict[date, Override]:
    """
    Key a chore's override rows by original date.

    If the input holds more than one row for the same date, the most recently
    written one (by ``created_at``, then input order) is honored.
    """
    latest: Dict[date, object] = {}
    for row in rows:
        current = latest.get(row.original_date)
        if current is None or _written_at(row) >= _written_at(current):
            latest[row.original_date] = row

    indexed: Dict[date, Override] = {}
    for original_date, row in latest.items():
        override = override_from_row(row)
        if override is not None:
            indexed[original_date] = override
    return indexed


def _written_at(row) -> datetime:
    return getattr(row, "created_at", None) or datetime.min


def apply_override(original_date: date, assignee_id: Optional[str], override: Optional[Override]) -> EffectiveSlot:
    """Apply at most one override to a nominal (date, assignee) pair."""
    if override is None:
        return EffectiveSlot(original_date, original_date, assignee_id, skipped=False)
    if override.original_date != original_date:
        raise ValueError(f"Override for {override.original_date} applied to occurrence {original_date}")

    if isinstance(override, Skip):
        return EffectiveSlot(original_date, original_date, assignee_id, skipped=True, override=override)
    if isinstance(override, Reassign):
        return EffectiveSlot(original_date, original_date, override.new_assignee_id, skipped=False, override=override)
    if isinstance(override, Reschedule):
        return EffectiveSlot(original_date, override.new_date, assignee_id, skipped=False, override=override)
    if isinstance(override, Combination):
        return EffectiveSlot(
            original_date, override.new_date, override.new_assignee_id, skipped=False, override=override
        )
    raise TypeError(f"Unknown override type: {type(override).__name__}")
