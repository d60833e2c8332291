"""CSV export utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pandas as pd
from sqlalchemy.orm import Session

from choreplan.domain.repositories import ChoreRepository
from choreplan.engine.occurrences import Occurrence
from choreplan.services.access import require_membership
from choreplan.services.views import occurrences_frame


def export_occurrences_csv(
    csv_path: str | Path,
    occurrences: List[Occurrence],
    chores: Dict[str, object] | None = None,
) -> int:
    """
    Write occurrences to CSV.
    
    Returns:
        Number of rows written
    """
    df = occurrences_frame(occurrences, chores)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} occurrences to {csv_path}")
    return len(df)


def export_chores_csv(session: Session, csv_path: str | Path, household_id: str, member_id: str) -> int:
    """
    Write a household's chores (archived included) to CSV in the import layout.

    Raises:
        HouseholdAccessError: If the household is missing or member_id is not in it
    """
    require_membership(session, household_id, member_id)
    chores = ChoreRepository.get_by_household(session, household_id, include_archived=True)
    rows = [
        {
            "chore_id": c.id,
            "title": c.title,
            "zone": c.zone_name,
            "frequency_days": c.frequency_days,
            "start_date": c.start_date.isoformat(),
            "end_date": c.end_date.isoformat() if c.end_date else None,
            "assignment_strategy": c.assignment_strategy,
            "fixed_assignee_id": c.fixed_assignee_id,
            "rotation_sequence": ";".join(c.rotation_sequence or []) or None,
            "rotation_interval_days": c.rotation_interval_days,
            "archived": bool(c.archived),
            "description": c.description,
        }
        for c in chores
    ]
    df = pd.DataFrame(rows)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} chores to {csv_path}")
    return len(df)
