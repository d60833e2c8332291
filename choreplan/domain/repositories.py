"""Repository classes for data access."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from .models import Chore, ChoreCompletion, ChoreOverride, Household, HouseholdMember, Zone


class HouseholdRepository:
    """Repository for households and their members."""
    
    @staticmethod
    def get_by_id(session: Session, household_id: str) -> Optional[Household]:
        """Get household by ID."""
        return session.query(Household).filter(Household.id == household_id).first()
    
    @staticmethod
    def create(session: Session, household: Household) -> Household:
        """Create a new household."""
        session.add(household)
        session.commit()
        session.refresh(household)
        return household
    
    @staticmethod
    def get_members(session: Session, household_id: str) -> List[HouseholdMember]:
        """Get all members of a household."""
        return session.query(HouseholdMember).filter(HouseholdMember.household_id == household_id).all()
    
    @staticmethod
    def get_member(session: Session, household_id: str, member_id: str) -> Optional[HouseholdMember]:
        """Get a member by ID, only if they belong to the household."""
        return (
            session.query(HouseholdMember)
            .filter(HouseholdMember.household_id == household_id, HouseholdMember.id == member_id)
            .first()
        )
    
    @staticmethod
    def bulk_create_members(session: Session, members: List[HouseholdMember]) -> None:
        """Create multiple members."""
        session.add_all(members)
        session.commit()


class ZoneRepository:
    """Repository for zone data access."""
    
    @staticmethod
    def get_by_household(session: Session, household_id: str) -> List[Zone]:
        """Get all zones for a household, ordered by name."""
        return session.query(Zone).filter(Zone.household_id == household_id).order_by(Zone.name).all()
    
    @staticmethod
    def get_by_name(session: Session, household_id: str, name: str) -> Optional[Zone]:
        """Get a zone by its unique name within a household."""
        return session.query(Zone).filter(Zone.household_id == household_id, Zone.name == name).first()
    
    @staticmethod
    def get_or_create(session: Session, household_id: str, name: str) -> Zone:
        """Return the named zone, creating it if missing."""
        zone = ZoneRepository.get_by_name(session, household_id, name)
        if zone is None:
            zone = Zone(household_id=household_id, name=name)
            session.add(zone)
            session.commit()
            session.refresh(zone)
        return zone


class ChoreRepository:
    """Repository for chore data access."""
    
    @staticmethod
    def get_by_id(session: Session, chore_id: str) -> Optional[Chore]:
        """Get chore by ID."""
        return session.query(Chore).filter(Chore.id == chore_id).first()
    
    @staticmethod
    def get_by_household(session: Session, household_id: str, include_archived: bool = False) -> List[Chore]:
        """Get chores for a household (active only unless include_archived)."""
        query = session.query(Chore).filter(Chore.household_id == household_id)
        if not include_archived:
            query = query.filter(Chore.archived == False)  # noqa: E712
        return query.order_by(Chore.title).all()
    
    @staticmethod
    def create(session: Session, chore: Chore) -> Chore:
        """Create a new chore."""
        session.add(chore)
        session.commit()
        session.refresh(chore)
        return chore
    
    @staticmethod
    def bulk_create(session: Session, chores: List[Chore]) -> None:
        """Create multiple chores."""
        session.add_all(chores)
        session.commit()
    
    @staticmethod
    def archive(session: Session, chore: Chore) -> Chore:
        """Mark a chore archived; its history is kept."""
        chore.archived = True
        session.commit()
        return chore


class OverrideRepository:
    """Repository for per-occurrence overrides."""
    
    @staticmethod
    def get_for_chores(session: Session, chore_ids: Iterable[str]) -> List[ChoreOverride]:
        """Get all overrides for the given chores."""
        chore_ids = list(chore_ids)
        if not chore_ids:
            return []
        return session.query(ChoreOverride).filter(ChoreOverride.chore_id.in_(chore_ids)).all()
    
    @staticmethod
    def get(session: Session, chore_id: str, original_date: date) -> Optional[ChoreOverride]:
        """Get the override for one (chore, original_date) slot."""
        return (
            session.query(ChoreOverride)
            .filter(ChoreOverride.chore_id == chore_id, ChoreOverride.original_date == original_date)
            .first()
        )
    
    @staticmethod
    def upsert(
        session: Session,
        chore_id: str,
        original_date: date,
        is_skipped: bool = False,
        new_assignee_id: str | None = None,
        new_date: date | None = None,
    ) -> ChoreOverride:
        """Create or replace the override for (chore_id, original_date). Last write wins."""
        override = OverrideRepository.get(session, chore_id, original_date)
        if override is None:
            override = ChoreOverride(chore_id=chore_id, original_date=original_date)
            session.add(override)
        override.is_skipped = is_skipped
        override.new_assignee_id = new_assignee_id
        override.new_date = new_date
        override.created_at = datetime.utcnow()
        session.commit()
        session.refresh(override)
        return override
    
    @staticmethod
    def delete(session: Session, chore_id: str, original_date: date) -> int:
        """Delete the override for a slot. Returns number of deleted rows."""
        count = (
            session.query(ChoreOverride)
            .filter(ChoreOverride.chore_id == chore_id, ChoreOverride.original_date == original_date)
            .delete(synchronize_session=False)
        )
        session.commit()
        return count


class CompletionRepository:
    """Repository for the append-only completion log."""
    
    @staticmethod
    def get_by_id(session: Session, completion_id: str) -> Optional[ChoreCompletion]:
        """Get completion by ID."""
        return session.query(ChoreCompletion).filter(ChoreCompletion.id == completion_id).first()
    
    @staticmethod
    def get_for_chores(
        session: Session,
        chore_ids: Iterable[str],
        start: date | None = None,
        end: date | None = None,
    ) -> List[ChoreCompletion]:
        """
        Get completions for the given chores.

        With a range, a completion is included when it was recorded within
        [start, end] by calendar date, or when its scheduled_for date is.
        """
        chore_ids = list(chore_ids)
        if not chore_ids:
            return []
        query = session.query(ChoreCompletion).filter(ChoreCompletion.chore_id.in_(chore_ids))

        by_time = []
        by_slot = [ChoreCompletion.scheduled_for.isnot(None)]
        if start is not None:
            by_time.append(ChoreCompletion.completed_at >= datetime.combine(start, time.min))
            by_slot.append(ChoreCompletion.scheduled_for >= start)
        if end is not None:
            by_time.append(ChoreCompletion.completed_at < datetime.combine(end + timedelta(days=1), time.min))
            by_slot.append(ChoreCompletion.scheduled_for <= end)
        if by_time:
            query = query.filter(or_(and_(*by_time), and_(*by_slot)))

        return query.order_by(ChoreCompletion.completed_at).all()
    
    @staticmethod
    def create(session: Session, completion: ChoreCompletion) -> ChoreCompletion:
        """Append a completion record."""
        session.add(completion)
        session.commit()
        session.refresh(completion)
        return completion
    
    @staticmethod
    def bulk_create(session: Session, completions: List[ChoreCompletion]) -> None:
        """Append multiple completion records."""
        session.add_all(completions)
        session.commit()
    
    @staticmethod
    def delete(session: Session, completion: ChoreCompletion) -> None:
        """Delete one completion record."""
        session.delete(completion)
        session.commit()
