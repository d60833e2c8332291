"""Tests for CSV import/export functionality."""

from datetime import date, datetime

import pandas as pd
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from choreplan.domain.models import Base
from choreplan.domain.repositories import ChoreRepository, CompletionRepository, HouseholdRepository, ZoneRepository
from choreplan.errors import HouseholdAccessError
from choreplan.io.export_csv import export_chores_csv, export_occurrences_csv
from choreplan.io.import_csv import import_chores_csv, import_completions_csv, import_members_csv
from choreplan.services.schedule import build_household_schedule


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def imported(db_session, tmp_path):
    """Import members and chores for household 'home'."""
    members_csv = tmp_path / "members.csv"
    members_csv.write_text(
        """member_id,display_name,role
alice,Alice,OWNER
bob,Bob,
carol,Carol,member
"""
    )
    chores_csv = tmp_path / "chores.csv"
    chores_csv.write_text(
        """chore_id,title,zone,frequency_days,start_date,end_date,assignment_strategy,fixed_assignee_id,rotation_sequence,rotation_interval_days
bathroom,Clean bathroom,Bathroom,7,2024-01-01,,Rotation,,alice;bob;carol,7
dishes,Dishes,Kitchen,1,2024-01-01,2024-01-10,fixed,bob,,
plants,Water plants,Kitchen,3,2024-01-02,,,,,
"""
    )
    import_members_csv(db_session, members_csv, "home")
    import_chores_csv(db_session, chores_csv, "home")
    return "home"


def test_import_members_creates_household(db_session, imported):
    assert HouseholdRepository.get_by_id(db_session, "home") is not None
    members = {m.id: m for m in HouseholdRepository.get_members(db_session, "home")}
    assert set(members) == {"alice", "bob", "carol"}
    assert members["alice"].role == "owner"
    assert members["bob"].role == "member"


def test_import_chores(db_session, imported):
    bathroom = ChoreRepository.get_by_id(db_session, "bathroom")
    assert bathroom.assignment_strategy == "rotation"
    assert bathroom.rotation_sequence == ["alice", "bob", "carol"]
    assert bathroom.rotation_interval_days == 7
    assert bathroom.zone_name == "Bathroom"

    dishes = ChoreRepository.get_by_id(db_session, "dishes")
    assert dishes.fixed_assignee_id == "bob"
    assert dishes.end_date == date(2024, 1, 10)

    plants = ChoreRepository.get_by_id(db_session, "plants")
    assert plants.assignment_strategy == "none"
    assert plants.rotation_interval_days is None

    # Zones are shared by name
    assert [z.name for z in ZoneRepository.get_by_household(db_session, "home")] == ["Bathroom", "Kitchen"]


def test_import_chores_rejects_unknown_strategy(db_session, tmp_path):
    chores_csv = tmp_path / "chores.csv"
    chores_csv.write_text(
        """title,frequency_days,start_date,assignment_strategy
Mop,7,2024-01-01,lottery
"""
    )
    with pytest.raises(ValueError):
        import_chores_csv(db_session, chores_csv, "home")


def test_import_completions_deduplicates(db_session, imported, tmp_path):
    completions_csv = tmp_path / "completions.csv"
    completions_csv.write_text(
        """chore_id,completed_at,completed_by,scheduled_for,notes
bathroom,2024-01-08T10:00:00,alice,2024-01-08,Scrubbed
bathroom,2024-01-08T10:00:00,alice,2024-01-08,Scrubbed
dishes,2024-01-02T21:00:00,bob,,
"""
    )
    count = import_completions_csv(db_session, completions_csv)
    assert count == 2

    rows = CompletionRepository.get_for_chores(db_session, ["bathroom", "dishes"])
    assert len(rows) == 2
    bathroom = [r for r in rows if r.chore_id == "bathroom"][0]
    assert bathroom.completed_at == datetime(2024, 1, 8, 10)
    assert bathroom.scheduled_for == date(2024, 1, 8)
    assert bathroom.notes == "Scrubbed"


def test_export_occurrences_csv(db_session, imported, tmp_path):
    result = build_household_schedule(db_session, "home", "alice", date(2024, 1, 1), date(2024, 1, 14), today=date(2024, 1, 1))
    out = tmp_path / "occurrences.csv"
    count = export_occurrences_csv(out, result.occurrences, result.chores)

    df = pd.read_csv(out)
    assert count == len(df) == len(result.occurrences)
    bathroom = df[df["chore_id"] == "bathroom"]
    assert list(bathroom["date"]) == ["2024-01-01", "2024-01-08"]
    assert list(bathroom["assignee_id"]) == ["alice", "bob"]
    assert set(df["status"]) == {"pending"}


def test_export_chores_csv_round_trips_layout(db_session, imported, tmp_path):
    out = tmp_path / "chores_export.csv"
    assert export_chores_csv(db_session, out, "home", "alice") == 3

    df = pd.read_csv(out)
    assert list(df["chore_id"]) == ["bathroom", "dishes", "plants"]
    assert df.loc[df["chore_id"] == "bathroom", "rotation_sequence"].iloc[0] == "alice;bob;carol"


def test_export_chores_csv_requires_membership(db_session, imported, tmp_path):
    out = tmp_path / "chores_export.csv"
    with pytest.raises(HouseholdAccessError):
        export_chores_csv(db_session, out, "does-not-exist", "alice")
    with pytest.raises(HouseholdAccessError):
        export_chores_csv(db_session, out, "home", "mallory")
    assert not out.exists()
