"""CSV import utilities to load household data into the database."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from choreplan.domain.models import ASSIGNMENT_STRATEGIES, Chore, ChoreCompletion, Household, HouseholdMember
from choreplan.domain.repositories import HouseholdRepository, ZoneRepository


def _optional_str(row, column: str) -> str | None:
    value = row.get(column)
    if value is None or pd.isna(value) or str(value).strip() == "":
        return None
    return str(value).strip()


def _optional_date(row, column: str):
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value).date()


def _ensure_household(session: Session, household_id: str, name: str | None = None) -> Household:
    household = HouseholdRepository.get_by_id(session, household_id)
    if household is None:
        household = HouseholdRepository.create(session, Household(id=household_id, name=name or household_id))
    return household


def import_members_csv(session: Session, csv_path: str | Path, household_id: str) -> int:
    """
    Import household members from CSV (columns: member_id, display_name, role).
    
    The household is created if it does not exist yet.
    
    Returns:
        Number of members imported
    """
    df = pd.read_csv(csv_path, dtype=str)
    
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    
    _ensure_household(session, household_id)
    members = []
    for _, row in df.iterrows():
        members.append(
            HouseholdMember(
                id=str(row["member_id"]).strip(),
                household_id=household_id,
                display_name=_optional_str(row, "display_name"),
                role=(_optional_str(row, "role") or "member").lower(),
            )
        )
    
    HouseholdRepository.bulk_create_members(session, members)
    print(f"[INFO] Imported {len(members)} members from {csv_path}")
    return len(members)


def import_chores_csv(session: Session, csv_path: str | Path, household_id: str) -> int:
    """
    Import chores from CSV into database.
    
    Expected columns: chore_id (optional), title, zone, frequency_days, start_date,
    end_date, assignment_strategy, fixed_assignee_id, rotation_sequence
    (semicolon-separated member ids), rotation_interval_days, description.
    
    Returns:
        Number of chores imported
    """
    df = pd.read_csv(csv_path, dtype=str)
    
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    
    # Normalize strategy to lowercase
    if "assignment_strategy" in df.columns:
        df["assignment_strategy"] = df["assignment_strategy"].fillna("none").str.lower().str.strip()
    
    _ensure_household(session, household_id)
    chores = []
    for _, row in df.iterrows():
        strategy = _optional_str(row, "assignment_strategy") or "none"
        if strategy not in ASSIGNMENT_STRATEGIES:
            raise ValueError(f"Unknown assignment_strategy '{strategy}' for chore '{row['title']}'")
        
        sequence = _optional_str(row, "rotation_sequence")
        interval = _optional_str(row, "rotation_interval_days")
        zone_name = _optional_str(row, "zone")
        
        chore = Chore(
            household_id=household_id,
            title=str(row["title"]).strip(),
            description=_optional_str(row, "description"),
            zone=zone_name,
            zone_id=ZoneRepository.get_or_create(session, household_id, zone_name).id if zone_name else None,
            frequency_days=int(_optional_str(row, "frequency_days") or 7),
            start_date=_optional_date(row, "start_date"),
            end_date=_optional_date(row, "end_date"),
            assignment_strategy=strategy,
            fixed_assignee_id=_optional_str(row, "fixed_assignee_id"),
            rotation_sequence=[m.strip() for m in sequence.split(";") if m.strip()] if sequence else None,
            rotation_interval_days=int(interval) if interval else None,
        )
        chore_id = _optional_str(row, "chore_id")
        if chore_id:
            chore.id = chore_id
        chores.append(chore)
    
    # Bulk insert
    session.add_all(chores)
    session.commit()
    
    print(f"[INFO] Imported {len(chores)} chores from {csv_path}")
    return len(chores)


def import_completions_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import completion log rows from CSV (chore_id, completed_at, completed_by, scheduled_for, notes).
    
    Exact duplicate rows (same chore, timestamp and member) are dropped.
    
    Returns:
        Number of completions imported
    """
    df = pd.read_csv(csv_path, dtype=str)
    
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    df["completed_at"] = pd.to_datetime(df["completed_at"])
    
    # Deduplicate repeated exports of the same log
    subset = [c for c in ("chore_id", "completed_at", "completed_by") if c in df.columns]
    df = df.sort_values("completed_at").drop_duplicates(subset=subset, keep="first")
    
    completions = []
    for _, row in df.iterrows():
        completions.append(
            ChoreCompletion(
                chore_id=str(row["chore_id"]).strip(),
                completed_at=row["completed_at"].to_pydatetime(),
                completed_by=_optional_str(row, "completed_by"),
                scheduled_for=_optional_date(row, "scheduled_for"),
                notes=_optional_str(row, "notes"),
            )
        )
    
    # Bulk insert
    session.add_all(completions)
    session.commit()
    
    print(f"[INFO] Imported {len(completions)} completions from {csv_path}")
    return len(completions)
