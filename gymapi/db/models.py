from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class PersonGender(StrEnum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class MembershipStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    EXPIRED = "Expired"


class TrainerStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "OnLeave"


class EquipmentCategory(StrEnum):
    CARDIO = "Cardio"
    STRENGTH = "Strength"
    FREE_WEIGHTS = "FreeWeights"
    FUNCTIONAL = "Functional"
    ACCESSORIES = "Accessories"


class EquipmentStatus(StrEnum):
    AVAILABLE = "Available"
    IN_USE = "InUse"
    MAINTENANCE = "Maintenance"
    OUT_OF_ORDER = "OutOfOrder"


class AssignmentStatus(StrEnum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class AssignmentType(StrEnum):
    EXERCISE = "Exercise"
    READING = "Reading"
    VIDEO = "Video"
    QUIZ = "Quiz"


class Base(DeclarativeBase):
    """Base class for all database models."""


class AuditMixin:
    """Identity and audit columns shared by every table.

    Every row carries:
    - id: string UUID primary key
    - created_at: set on insert (UTC)
    - updated_at: set on every update (UTC), null until the first update
    - is_deleted: soft-delete flag; deleted rows are filtered out of all queries
    """

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, onupdate=_utcnow)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Member(AuditMixin, Base):
    __tablename__ = "members"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    join_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=MembershipStatus.ACTIVE.value)
    emergency_contact_name: Mapped[str] = mapped_column(String(100), nullable=False)
    emergency_contact_phone: Mapped[str] = mapped_column(String(20), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Trainer(AuditMixin, Base):
    __tablename__ = "trainers"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    specialization: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    certification: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    hire_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TrainerStatus.ACTIVE.value)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Equipment(AuditMixin, Base):
    __tablename__ = "equipment"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    manufacturer: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    serial_number: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)
    purchase_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=EquipmentStatus.AVAILABLE.value)
    last_maintenance_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_maintenance_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str] = mapped_column(String(100), nullable=False, default="")


class Assignment(AuditMixin, Base):
    """Work a trainer sets for one member, or for all members when member_id is null."""

    __tablename__ = "assignments"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    trainer_id: Mapped[str] = mapped_column(String, ForeignKey("trainers.id"), nullable=False, index=True)
    member_id: Mapped[str | None] = mapped_column(String, ForeignKey("members.id"), nullable=True, index=True)
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=AssignmentStatus.ACTIVE.value)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=AssignmentType.EXERCISE.value)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    trainer: Mapped[Trainer] = relationship(lazy="joined")
    member: Mapped[Member | None] = relationship(lazy="joined")

    __table_args__ = (Index("idx_assignments_trainer_created", "trainer_id", "created_at"),)
