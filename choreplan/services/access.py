"""Household scope checks for queries and mutations."""

from __future__ import annotations

from sqlalchemy.orm import Session

from choreplan.domain.models import Chore, HouseholdMember
from choreplan.domain.repositories import ChoreRepository, HouseholdRepository
from choreplan.errors import HouseholdAccessError


def require_membership(session: Session, household_id: str, member_id: str) -> HouseholdMember:
    """
    Ensure the acting member belongs to the household.
    
    Raises:
        HouseholdAccessError: If the household does not exist or the member is not in it
    """
    if HouseholdRepository.get_by_id(session, household_id) is None:
        raise HouseholdAccessError(f"Household {household_id} not found")
    member = HouseholdRepository.get_member(session, household_id, member_id)
    if member is None:
        raise HouseholdAccessError(f"Member {member_id} is not part of household {household_id}")
    return member


def require_chore(session: Session, household_id: str, chore_id: str) -> Chore:
    """Fetch a chore, refusing chores that belong to another household."""
    chore = ChoreRepository.get_by_id(session, chore_id)
    if chore is None or chore.household_id != household_id:
        raise HouseholdAccessError(f"Chore {chore_id} not found in household {household_id}")
    return chore


def require_assignee(session: Session, household_id: str, member_id: str) -> HouseholdMember:
    """An assignee must be a member of the chore's household."""
    member = HouseholdRepository.get_member(session, household_id, member_id)
    if member is None:
        raise HouseholdAccessError(f"Assignee {member_id} is not part of household {household_id}")
    return member
