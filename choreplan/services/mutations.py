"""Mutation entry points: completions, overrides and archiving.

Each function performs a single write scoped to one row (or one
(chore, original_date) slot) after checking the caller's household scope.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Session

from choreplan.domain.models import Chore, ChoreCompletion, ChoreOverride
from choreplan.domain.repositories import ChoreRepository, CompletionRepository, OverrideRepository
from choreplan.engine.overrides import Combination, Reassign, Reschedule, Skip, build_override
from choreplan.engine.recurrence import is_nominal_date
from choreplan.errors import HouseholdAccessError

from .access import require_assignee, require_chore, require_membership


def _require_slot(chore, original_date: date) -> None:
    if not is_nominal_date(original_date, chore.start_date, chore.frequency_days, chore.end_date):
        raise ValueError(f"{original_date} is not a scheduled date of chore {chore.id}")


def record_completion(
    session: Session,
    household_id: str,
    member_id: str,
    chore_id: str,
    completed_at: datetime | None = None,
    notes: str | None = None,
    completed_by: str | None = None,
    scheduled_for: date | None = None,
) -> ChoreCompletion:
    """
    Append a completion for a chore.
    
    Args:
        session: Database session
        household_id: Household scope of the request
        member_id: Acting member
        chore_id: Chore that was done
        completed_at: When it was done (default: now)
        notes: Optional free text
        completed_by: Member who did it (default: the acting member)
        scheduled_for: Original date of the occurrence being ticked off, if known
    
    Returns:
        The persisted completion
    """
    require_membership(session, household_id, member_id)
    chore = require_chore(session, household_id, chore_id)
    completed_by = completed_by or member_id
    if completed_by != member_id:
        require_assignee(session, household_id, completed_by)
    if scheduled_for is not None:
        _require_slot(chore, scheduled_for)
    
    completion = ChoreCompletion(
        chore_id=chore.id,
        completed_at=completed_at or datetime.now(),
        completed_by=completed_by,
        scheduled_for=scheduled_for,
        notes=notes,
    )
    return CompletionRepository.create(session, completion)


def remove_completion(session: Session, household_id: str, member_id: str, completion_id: str) -> None:
    """Delete one completion (undo of a mistaken check-off)."""
    require_membership(session, household_id, member_id)
    completion = CompletionRepository.get_by_id(session, completion_id)
    if completion is None:
        raise HouseholdAccessError(f"Completion {completion_id} not found in household {household_id}")
    require_chore(session, household_id, completion.chore_id)
    CompletionRepository.delete(session, completion)


def set_override(
    session: Session,
    household_id: str,
    member_id: str,
    chore_id: str,
    original_date: date,
    skipped: bool = False,
    new_assignee_id: str | None = None,
    new_date: date | None = None,
) -> ChoreOverride:
    """
    Create or replace the override for one occurrence.
    
    The fields are normalized to a single variant before they are stored, so a
    skip never keeps a stale assignee or date. A second call for the same
    (chore_id, original_date) replaces the first.
    
    Raises:
        HouseholdAccessError: If the chore or the new assignee is outside the household
        ValueError: If original_date is not a scheduled date or nothing is overridden
    """
    require_membership(session, household_id, member_id)
    chore = require_chore(session, household_id, chore_id)
    _require_slot(chore, original_date)
    
    override = build_override(original_date, skipped, new_assignee_id, new_date)
    if override is None:
        raise ValueError("An override must skip, reassign or reschedule; use clear_override to reset a slot")
    if isinstance(override, (Reassign, Combination)):
        require_assignee(session, household_id, override.new_assignee_id)
    
    return OverrideRepository.upsert(
        session,
        chore.id,
        original_date,
        is_skipped=isinstance(override, Skip),
        new_assignee_id=override.new_assignee_id if isinstance(override, (Reassign, Combination)) else None,
        new_date=override.new_date if isinstance(override, (Reschedule, Combination)) else None,
    )


def clear_override(session: Session, household_id: str, member_id: str, chore_id: str, original_date: date) -> bool:
    """Remove the override for one occurrence. Returns True if one existed."""
    require_membership(session, household_id, member_id)
    chore = require_chore(session, household_id, chore_id)
    return OverrideRepository.delete(session, chore.id, original_date) > 0


def archive_chore(session: Session, household_id: str, member_id: str, chore_id: str) -> Chore:
    """Archive a chore; it drops out of schedules but its history stays."""
    require_membership(session, household_id, member_id)
    chore = require_chore(session, household_id, chore_id)
    return ChoreRepository.archive(session, chore)
