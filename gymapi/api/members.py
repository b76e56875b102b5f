"""Member API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.orm import Session

from gymapi.api.schemas import MemberCreate, MemberDto
from gymapi.db import repository
from gymapi.db.session import get_db

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=list[MemberDto])
def get_members(db: Session = Depends(get_db)) -> list[MemberDto]:
    return [MemberDto.from_entity(member) for member in repository.list_members(db)]


@router.get("/{member_id}", response_model=MemberDto)
def get_member_by_id(member_id: str, db: Session = Depends(get_db)) -> MemberDto:
    return MemberDto.from_entity(repository.get_member(db, member_id))


@router.post("", response_model=MemberDto, status_code=status.HTTP_201_CREATED)
def create_member(request: MemberCreate, db: Session = Depends(get_db)) -> MemberDto:
    logger.info("POST /members endpoint called")
    member = repository.create_member(db, request.model_dump())
    return MemberDto.from_entity(member)
