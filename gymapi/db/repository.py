"""Repository functions for gym entities.

Create/read/list over members, trainers, equipment and assignments. All
reads exclude soft-deleted rows. Writes commit before returning so callers
get ids and server-side defaults back.
"""

from __future__ import annotations

from typing import Any, TypeVar

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gymapi.db.errors import DuplicateEntityError, EntityNotFoundError
from gymapi.db.models import Assignment, AuditMixin, Equipment, Member, Trainer

EntityT = TypeVar("EntityT", bound=AuditMixin)

MEMBER_DUPLICATE_MESSAGE = "A member with this email already exists."
TRAINER_DUPLICATE_MESSAGE = "A trainer with this email already exists."
EQUIPMENT_DUPLICATE_MESSAGE = "Equipment with this serial number already exists."


def _get_live(session: Session, model: type[EntityT], entity_id: str) -> EntityT:
    entity = session.execute(
        select(model).where(model.id == entity_id, model.is_deleted.is_(False))
    ).scalar_one_or_none()
    if entity is None:
        raise EntityNotFoundError(model.__name__, entity_id)
    return entity


def _list_live(session: Session, model: type[EntityT]) -> list[EntityT]:
    query = select(model).where(model.is_deleted.is_(False)).order_by(model.created_at)
    return list(session.execute(query).scalars().all())


def _add(session: Session, entity: EntityT, duplicate_message: str | None = None) -> EntityT:
    session.add(entity)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        # Unique key taken by a concurrent insert that passed the pre-check
        if duplicate_message is None:
            raise
        logger.warning(f"Duplicate {type(entity).__name__} rejected on insert", error=str(e.orig))
        raise DuplicateEntityError(duplicate_message) from e
    session.refresh(entity)
    logger.info(f"Created {type(entity).__name__}", entity_id=entity.id)
    return entity


def create_member(session: Session, data: dict[str, Any]) -> Member:
    """Create a member.

    Raises:
        DuplicateEntityError: If a member with the same email exists
    """
    email = data["email"].lower()
    existing = session.execute(select(Member).where(Member.email == email)).scalar_one_or_none()
    if existing is not None:
        raise DuplicateEntityError(MEMBER_DUPLICATE_MESSAGE)
    return _add(session, Member(**{**data, "email": email}), MEMBER_DUPLICATE_MESSAGE)


def get_member(session: Session, member_id: str) -> Member:
    return _get_live(session, Member, member_id)


def list_members(session: Session) -> list[Member]:
    return _list_live(session, Member)


def create_trainer(session: Session, data: dict[str, Any]) -> Trainer:
    """Create a trainer.

    Raises:
        DuplicateEntityError: If a trainer with the same email exists
    """
    email = data["email"].lower()
    existing = session.execute(select(Trainer).where(Trainer.email == email)).scalar_one_or_none()
    if existing is not None:
        raise DuplicateEntityError(TRAINER_DUPLICATE_MESSAGE)
    return _add(session, Trainer(**{**data, "email": email}), TRAINER_DUPLICATE_MESSAGE)


def get_trainer(session: Session, trainer_id: str) -> Trainer:
    return _get_live(session, Trainer, trainer_id)


def list_trainers(session: Session) -> list[Trainer]:
    return _list_live(session, Trainer)


def create_equipment(session: Session, data: dict[str, Any]) -> Equipment:
    """Create an equipment item.

    Raises:
        DuplicateEntityError: If the serial number is already registered
    """
    existing = session.execute(
        select(Equipment).where(Equipment.serial_number == data["serial_number"])
    ).scalar_one_or_none()
    if existing is not None:
        raise DuplicateEntityError(EQUIPMENT_DUPLICATE_MESSAGE)
    return _add(session, Equipment(**data), EQUIPMENT_DUPLICATE_MESSAGE)


def get_equipment(session: Session, equipment_id: str) -> Equipment:
    return _get_live(session, Equipment, equipment_id)


def list_equipment(session: Session) -> list[Equipment]:
    return _list_live(session, Equipment)


def create_assignment(session: Session, data: dict[str, Any]) -> Assignment:
    """Create an assignment for one member or, with no member_id, for everyone.

    Raises:
        EntityNotFoundError: If the trainer or the member does not exist
    """
    _get_live(session, Trainer, data["trainer_id"])
    if data.get("member_id"):
        _get_live(session, Member, data["member_id"])
    return _add(session, Assignment(**data))


def get_assignment(session: Session, assignment_id: str) -> Assignment:
    return _get_live(session, Assignment, assignment_id)


def list_assignments(
    session: Session,
    trainer_id: str | None = None,
    member_id: str | None = None,
    is_public: bool | None = None,
    page: int = 1,
    page_size: int = 10,
) -> list[Assignment]:
    """List assignments, newest first.

    Args:
        session: Database session
        trainer_id: Only assignments set by this trainer
        member_id: Only assignments for this member
        is_public: Filter on visibility when given
        page: 1-based page number
        page_size: Items per page

    Returns:
        Assignments on the requested page
    """
    query = select(Assignment).where(Assignment.is_deleted.is_(False))
    if trainer_id:
        query = query.where(Assignment.trainer_id == trainer_id)
    if member_id:
        query = query.where(Assignment.member_id == member_id)
    if is_public is not None:
        query = query.where(Assignment.is_public == is_public)
    query = query.order_by(Assignment.created_at.desc()).offset((page - 1) * page_size).limit(page_size)
    return list(session.execute(query).unique().scalars().all())
