"""Household schedule queries - fetch state for a window and run the engine over it."""

from __future__ import annotations

from datetime import date, timedelta

from sqlalchemy.orm import Session

from choreplan.config import ChoreConfig
from choreplan.domain.repositories import ChoreRepository, CompletionRepository, OverrideRepository
from choreplan.engine.occurrences import ScheduleBuilder, ScheduleResult

from .access import require_membership


def _completion_range(chores, overrides, window_start: date, window_end: date, cfg: ChoreConfig):
    """Calendar range that can hold completions relevant to the window."""
    pad = max([c.frequency_days or 1 for c in chores] + [cfg.completion_early_days or 0, cfg.completion_late_days or 0])
    start = window_start - timedelta(days=pad)
    end = window_end + timedelta(days=pad)
    # Slots rescheduled into the window keep their original date
    for row in overrides:
        if row.new_date is not None and window_start <= row.new_date <= window_end:
            start = min(start, row.original_date)
            end = max(end, row.original_date)
    return start, end


def build_household_schedule(
    session: Session,
    household_id: str,
    member_id: str,
    window_start: date,
    window_end: date,
    today: date | None = None,
    cfg: ChoreConfig | None = None,
) -> ScheduleResult:
    """
    Compute the effective schedule of a household's active chores for a window.
    
    Args:
        session: Database session
        household_id: Household scope, supplied by the caller
        member_id: Acting member (must belong to the household)
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)
        today: Reference date for pending/overdue (default: date.today())
        cfg: ChoreConfig
    
    Returns:
        ScheduleResult with occurrences and per-chore configuration errors
    """
    cfg = cfg or ChoreConfig()
    today = today or date.today()
    require_membership(session, household_id, member_id)
    
    builder = ScheduleBuilder(today, cfg)
    builder.check_window(window_start, window_end)
    
    chores = ChoreRepository.get_by_household(session, household_id)
    chore_ids = [c.id for c in chores]
    overrides = OverrideRepository.get_for_chores(session, chore_ids)
    start, end = _completion_range(chores, overrides, window_start, window_end, cfg)
    completions = CompletionRepository.get_for_chores(session, chore_ids, start, end)
    
    result = builder.build(chores, overrides, completions, window_start, window_end)
    
    for chore_id, error in result.errors.items():
        print(f"[WARN] Chore {chore_id} skipped: {error}")
    print(
        f"[INFO] Household {household_id}: {len(result.occurrences)} occurrences "
        f"from {len(chores) - len(result.errors)} chores ({window_start} to {window_end})"
    )
    return result
