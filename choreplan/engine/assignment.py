"""Assignment resolver: who is nominally responsible for a chore on a due-date."""

from __future__ import annotations

from datetime import date
from typing import Optional

from choreplan.domain.models import ASSIGNMENT_STRATEGIES, STRATEGY_FIXED, STRATEGY_NONE, STRATEGY_ROTATION
from choreplan.errors import ChoreConfigurationError


def rotation_interval(chore) -> int:
    """Rotation interval in days; an unset interval follows the chore's frequency."""
    interval = chore.rotation_interval_days
    if interval is None:
        interval = chore.frequency_days
    if interval is None or interval <= 0:
        raise ChoreConfigurationError(
            f"Chore {chore.id}: rotation_interval_days must be > 0, got {interval}",
            chore_id=chore.id,
        )
    return interval


def validate_chore_rules(chore) -> None:
    """
    Check a chore's recurrence and assignment configuration.
    
    Raises:
        ChoreConfigurationError: On invalid frequency, unknown strategy, missing
            fixed assignee, empty rotation sequence or non-positive rotation interval
    """
    strategy = chore.assignment_strategy or STRATEGY_NONE
    
    if chore.frequency_days is None or chore.frequency_days < 1:
        raise ChoreConfigurationError(
            f"Chore {chore.id}: frequency_days must be >= 1, got {chore.frequency_days}",
            chore_id=chore.id,
        )
    if strategy not in ASSIGNMENT_STRATEGIES:
        raise ChoreConfigurationError(
            f"Chore {chore.id}: unknown assignment strategy '{strategy}'",
            chore_id=chore.id,
        )
    if strategy == STRATEGY_FIXED and not chore.fixed_assignee_id:
        raise ChoreConfigurationError(
            f"Chore {chore.id}: fixed strategy requires a fixed assignee",
            chore_id=chore.id,
        )
    if strategy == STRATEGY_ROTATION:
        if not chore.rotation_sequence:
            raise ChoreConfigurationError(
                f"Chore {chore.id}: rotation strategy requires a non-empty rotation sequence",
                chore_id=chore.id,
            )
        rotation_interval(chore)


def resolve_assignee(chore, due_date: date) -> Optional[str]:
    """
    Compute the nominally assigned member for a due-date.
    
    Args:
        chore: Chore (or any object with the same attributes)
        due_date: Nominal due-date (never a rescheduled one)
    
    Returns:
        Member id, or None when the chore is unassigned
    """
    validate_chore_rules(chore)
    strategy = chore.assignment_strategy or STRATEGY_NONE
    
    if strategy == STRATEGY_NONE:
        return None
    if strategy == STRATEGY_FIXED:
        return chore.fixed_assignee_id
    
    # Rotation slot wraps cyclically
    sequence = list(chore.rotation_sequence)
    days_since_start = (due_date - chore.start_date).days
    index = (days_since_start // rotation_interval(chore)) % len(sequence)
    return sequence[index]
