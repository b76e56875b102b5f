"""Request and response models for the gym CRUD endpoints.

JSON uses camelCase; Python code uses snake_case field names.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gymapi.db.models import (
    Assignment,
    AssignmentStatus,
    AssignmentType,
    Equipment,
    EquipmentCategory,
    EquipmentStatus,
    Member,
    MembershipStatus,
    PersonGender,
    Trainer,
    TrainerStatus,
)

PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
MINIMUM_MEMBER_AGE = 16


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _years_between(born: date, today: date) -> int:
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


class MemberCreate(ApiModel):
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=50)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    phone_number: str = Field(..., alias="phoneNumber", pattern=PHONE_PATTERN)
    date_of_birth: date = Field(..., alias="dateOfBirth")
    gender: PersonGender
    emergency_contact_name: str = Field(..., alias="emergencyContactName", min_length=1, max_length=100)
    emergency_contact_phone: str = Field(..., alias="emergencyContactPhone", pattern=PHONE_PATTERN)

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, value: date) -> date:
        today = datetime.now(timezone.utc).date()
        if value > today:
            raise ValueError("Date of birth cannot be in the future.")
        if _years_between(value, today) < MINIMUM_MEMBER_AGE:
            raise ValueError(f"Member must be at least {MINIMUM_MEMBER_AGE} years old.")
        return value


class MemberDto(ApiModel):
    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone_number: str = Field(alias="phoneNumber")
    date_of_birth: date = Field(alias="dateOfBirth")
    gender: PersonGender
    join_date: datetime = Field(alias="joinDate")
    status: MembershipStatus
    emergency_contact_name: str = Field(alias="emergencyContactName")
    emergency_contact_phone: str = Field(alias="emergencyContactPhone")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_entity(cls, member: Member) -> MemberDto:
        return cls(
            id=member.id,
            first_name=member.first_name,
            last_name=member.last_name,
            email=member.email,
            phone_number=member.phone_number,
            date_of_birth=member.date_of_birth,
            gender=PersonGender(member.gender),
            join_date=member.join_date,
            status=MembershipStatus(member.status),
            emergency_contact_name=member.emergency_contact_name,
            emergency_contact_phone=member.emergency_contact_phone,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )


class TrainerCreate(ApiModel):
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=50)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    phone_number: str = Field(..., alias="phoneNumber", pattern=PHONE_PATTERN)
    specialization: str = Field(default="", max_length=100)
    certification: str = Field(default="", max_length=100)
    hourly_rate: float = Field(..., alias="hourlyRate", ge=0, le=10000)
    bio: str = Field(default="", max_length=2000)


class TrainerDto(ApiModel):
    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone_number: str = Field(alias="phoneNumber")
    specialization: str
    certification: str
    hire_date: datetime = Field(alias="hireDate")
    status: TrainerStatus
    hourly_rate: float = Field(alias="hourlyRate")
    bio: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_entity(cls, trainer: Trainer) -> TrainerDto:
        return cls(
            id=trainer.id,
            first_name=trainer.first_name,
            last_name=trainer.last_name,
            email=trainer.email,
            phone_number=trainer.phone_number,
            specialization=trainer.specialization,
            certification=trainer.certification,
            hire_date=trainer.hire_date,
            status=TrainerStatus(trainer.status),
            hourly_rate=float(trainer.hourly_rate),
            bio=trainer.bio,
            created_at=trainer.created_at,
            updated_at=trainer.updated_at,
        )


class EquipmentCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    category: EquipmentCategory
    manufacturer: str = Field(default="", max_length=100)
    serial_number: str = Field(..., alias="serialNumber", min_length=1, max_length=100)
    purchase_date: date = Field(..., alias="purchaseDate")
    purchase_price: float = Field(..., alias="purchasePrice", ge=0)
    location: str = Field(default="", max_length=100)

    @field_validator("purchase_date")
    @classmethod
    def validate_purchase_date(cls, value: date) -> date:
        if value > datetime.now(timezone.utc).date():
            raise ValueError("Purchase date cannot be in the future.")
        return value


class EquipmentDto(ApiModel):
    id: str
    name: str
    description: str
    category: EquipmentCategory
    manufacturer: str
    serial_number: str = Field(alias="serialNumber")
    purchase_date: date = Field(alias="purchaseDate")
    purchase_price: float = Field(alias="purchasePrice")
    status: EquipmentStatus
    last_maintenance_date: date | None = Field(default=None, alias="lastMaintenanceDate")
    next_maintenance_date: date | None = Field(default=None, alias="nextMaintenanceDate")
    location: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_entity(cls, equipment: Equipment) -> EquipmentDto:
        return cls(
            id=equipment.id,
            name=equipment.name,
            description=equipment.description,
            category=EquipmentCategory(equipment.category),
            manufacturer=equipment.manufacturer,
            serial_number=equipment.serial_number,
            purchase_date=equipment.purchase_date,
            purchase_price=float(equipment.purchase_price),
            status=EquipmentStatus(equipment.status),
            last_maintenance_date=equipment.last_maintenance_date,
            next_maintenance_date=equipment.next_maintenance_date,
            location=equipment.location,
            created_at=equipment.created_at,
            updated_at=equipment.updated_at,
        )


class AssignmentCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    trainer_id: str = Field(..., alias="trainerId", min_length=1)
    member_id: str | None = Field(default=None, alias="memberId")
    due_date: datetime = Field(..., alias="dueDate")
    type: AssignmentType = AssignmentType.EXERCISE
    instructions: str = Field(default="", max_length=4000)
    points: int = Field(default=0, ge=0, le=1000)
    is_public: bool = Field(default=True, alias="isPublic")


class AssignmentDto(ApiModel):
    id: str
    title: str
    description: str
    trainer_id: str = Field(alias="trainerId")
    trainer_name: str = Field(alias="trainerName")
    member_id: str | None = Field(default=None, alias="memberId")
    member_name: str | None = Field(default=None, alias="memberName")
    due_date: datetime = Field(alias="dueDate")
    status: AssignmentStatus
    type: AssignmentType
    instructions: str
    points: int
    is_public: bool = Field(alias="isPublic")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_entity(cls, assignment: Assignment) -> AssignmentDto:
        return cls(
            id=assignment.id,
            title=assignment.title,
            description=assignment.description,
            trainer_id=assignment.trainer_id,
            trainer_name=assignment.trainer.full_name,
            member_id=assignment.member_id,
            member_name=assignment.member.full_name if assignment.member else None,
            due_date=assignment.due_date,
            status=AssignmentStatus(assignment.status),
            type=AssignmentType(assignment.type),
            instructions=assignment.instructions,
            points=assignment.points,
            is_public=assignment.is_public,
            created_at=assignment.created_at,
            updated_at=assignment.updated_at,
        )
