from datetime import datetime
from typing import Optional
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import (
    String, Float, DateTime, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

class Base(DeclarativeBase):
    pass

# Postgres TIMESTAMP in production, generic DateTime for SQLite tests
TIMESTAMP_TYPE = DateTime(timezone=True).with_variant(TIMESTAMP(timezone=True), 'postgresql')

# --- Team Roster ---

class TeamMemberModel(Base):
    __tablename__ = "team_members"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    email: Mapped[Optional[str]] = mapped_column(String, index=True)
    capacity: Mapped[float] = mapped_column(Float, nullable=False, server_default='40')
    role: Mapped[str] = mapped_column(String, nullable=False, server_default='user')
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP_TYPE, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP_TYPE, server_default=func.now(), onupdate=func.now())

# --- Capacity Overrides ---

class CapacityOverrideModel(Base):
    """
    Sprint-local capacity for one member.

    One row per (group_id, member_id); the roster's default capacity is never
    touched by overrides.
    """
    __tablename__ = "capacity_overrides"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    group_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    member_id: Mapped[str] = mapped_column(
        ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True
    )
    capacity: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP_TYPE, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP_TYPE, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('group_id', 'member_id', name='uq_override_group_member'),
    )
