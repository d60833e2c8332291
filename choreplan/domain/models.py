"""SQLAlchemy models for household chore scheduling."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship

STRATEGY_NONE = "none"
STRATEGY_FIXED = "fixed"
STRATEGY_ROTATION = "rotation"
ASSIGNMENT_STRATEGIES = (STRATEGY_NONE, STRATEGY_FIXED, STRATEGY_ROTATION)


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Household(Base):
    """A household whose members share chores."""
    
    __tablename__ = "households"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    # Relationships
    members = relationship("HouseholdMember", back_populates="household")
    zones = relationship("Zone", back_populates="household")
    chores = relationship("Chore", back_populates="household")
    
    def __repr__(self) -> str:
        return f"<Household(id={self.id}, name='{self.name}')>"


class HouseholdMember(Base):
    """Membership of a person in a household; the id is the assignee identity."""
    
    __tablename__ = "household_members"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    household_id = Column(String(36), ForeignKey("households.id"), nullable=False)
    display_name = Column(String(200), nullable=True)
    role = Column(String(20), nullable=False, default="member")  # owner, member
    
    household = relationship("Household", back_populates="members")
    
    def __repr__(self) -> str:
        return f"<HouseholdMember(id={self.id}, household={self.household_id}, role='{self.role}')>"


class Zone(Base):
    """A household area used to group chores (e.g., Kitchen)."""
    
    __tablename__ = "chore_zones"
    __table_args__ = (UniqueConstraint("household_id", "name", name="uq_zone_household_name"),)
    
    id = Column(String(36), primary_key=True, default=_new_id)
    household_id = Column(String(36), ForeignKey("households.id"), nullable=False)
    name = Column(String(100), nullable=False)
    
    household = relationship("Household", back_populates="zones")
    chores = relationship("Chore", back_populates="zone_ref")
    
    def __repr__(self) -> str:
        return f"<Zone(id={self.id}, name='{self.name}')>"


class Chore(Base):
    """A recurring chore with its recurrence and assignment rules."""
    
    __tablename__ = "chores"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    household_id = Column(String(36), ForeignKey("households.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    zone = Column(String(100), nullable=True)  # Free-text zone, superseded by zone_id
    zone_id = Column(String(36), ForeignKey("chore_zones.id"), nullable=True)
    
    # Schedule
    frequency_days = Column(Integer, nullable=False, default=7)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # Inclusive
    
    # Assignment
    assignment_strategy = Column(String(20), nullable=False, default=STRATEGY_NONE)
    fixed_assignee_id = Column(String(36), ForeignKey("household_members.id"), nullable=True)
    rotation_sequence = Column(JSON, nullable=True)  # Ordered list of member ids
    rotation_interval_days = Column(Integer, nullable=True)  # NULL = frequency_days
    
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    # Relationships
    household = relationship("Household", back_populates="chores")
    zone_ref = relationship("Zone", back_populates="chores")
    overrides = relationship("ChoreOverride", back_populates="chore")
    completions = relationship("ChoreCompletion", back_populates="chore")
    
    @property
    def zone_name(self) -> str:
        """Display name of the chore's zone."""
        if self.zone_ref is not None:
            return self.zone_ref.name
        return self.zone or "Uncategorized"
    
    def __repr__(self) -> str:
        return (
            f"<Chore(id={self.id}, title='{self.title}', every={self.frequency_days}d, "
            f"strategy='{self.assignment_strategy}')>"
        )


class ChoreOverride(Base):
    """Exception to the nominal schedule for one occurrence (skip, reassign, reschedule)."""
    
    __tablename__ = "chore_overrides"
    __table_args__ = (UniqueConstraint("chore_id", "original_date", name="uq_override_chore_date"),)
    
    id = Column(String(36), primary_key=True, default=_new_id)
    chore_id = Column(String(36), ForeignKey("chores.id"), nullable=False)
    original_date = Column(Date, nullable=False)  # The calculated due date being modified
    is_skipped = Column(Boolean, nullable=False, default=False)
    new_assignee_id = Column(String(36), ForeignKey("household_members.id"), nullable=True)
    new_date = Column(Date, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    chore = relationship("Chore", back_populates="overrides")
    
    def __repr__(self) -> str:
        return (
            f"<ChoreOverride(chore={self.chore_id}, date={self.original_date}, skipped={self.is_skipped}, "
            f"assignee={self.new_assignee_id}, new_date={self.new_date})>"
        )


class ChoreCompletion(Base):
    """Append-only log entry recording that a chore was done."""
    
    __tablename__ = "chore_completions"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    chore_id = Column(String(36), ForeignKey("chores.id"), nullable=False)
    completed_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    completed_by = Column(String(36), ForeignKey("household_members.id"), nullable=True)
    scheduled_for = Column(Date, nullable=True)  # Original date of the occurrence ticked off
    notes = Column(Text, nullable=True)
    
    chore = relationship("Chore", back_populates="completions")
    
    def __repr__(self) -> str:
        return f"<ChoreCompletion(id={self.id}, chore={self.chore_id}, at={self.completed_at}, by={self.completed_by})>"
