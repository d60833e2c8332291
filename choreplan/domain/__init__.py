"""Domain models and data access layer."""

from .models import Base, Chore, ChoreCompletion, ChoreOverride, Household, HouseholdMember, Zone
from .repositories import (
    ChoreRepository,
    CompletionRepository,
    HouseholdRepository,
    OverrideRepository,
    ZoneRepository,
)

__all__ = [
    "Base",
    "Household",
    "HouseholdMember",
    "Zone",
    "Chore",
    "ChoreOverride",
    "ChoreCompletion",
    "HouseholdRepository",
    "ZoneRepository",
    "ChoreRepository",
    "OverrideRepository",
    "CompletionRepository",
]
