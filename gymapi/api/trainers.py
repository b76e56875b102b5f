"""Trainer API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.orm import Session

from gymapi.api.schemas import TrainerCreate, TrainerDto
from gymapi.db import repository
from gymapi.db.session import get_db

router = APIRouter(prefix="/trainers", tags=["trainers"])


@router.get("", response_model=list[TrainerDto])
def get_trainers(db: Session = Depends(get_db)) -> list[TrainerDto]:
    return [TrainerDto.from_entity(trainer) for trainer in repository.list_trainers(db)]


@router.get("/{trainer_id}", response_model=TrainerDto)
def get_trainer_by_id(trainer_id: str, db: Session = Depends(get_db)) -> TrainerDto:
    return TrainerDto.from_entity(repository.get_trainer(db, trainer_id))


@router.post("", response_model=TrainerDto, status_code=status.HTTP_201_CREATED)
def create_trainer(request: TrainerCreate, db: Session = Depends(get_db)) -> TrainerDto:
    logger.info("POST /trainers endpoint called")
    trainer = repository.create_trainer(db, request.model_dump())
    return TrainerDto.from_entity(trainer)
