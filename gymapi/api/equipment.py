"""Equipment API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.orm import Session

from gymapi.api.schemas import EquipmentCreate, EquipmentDto
from gymapi.db import repository
from gymapi.db.session import get_db

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.get("", response_model=list[EquipmentDto])
def get_equipment_list(db: Session = Depends(get_db)) -> list[EquipmentDto]:
    return [EquipmentDto.from_entity(item) for item in repository.list_equipment(db)]


@router.get("/{equipment_id}", response_model=EquipmentDto)
def get_equipment_by_id(equipment_id: str, db: Session = Depends(get_db)) -> EquipmentDto:
    return EquipmentDto.from_entity(repository.get_equipment(db, equipment_id))


@router.post("", response_model=EquipmentDto, status_code=status.HTTP_201_CREATED)
def create_equipment(request: EquipmentCreate, db: Session = Depends(get_db)) -> EquipmentDto:
    logger.info("POST /equipment endpoint called", serial_number=request.serial_number)
    item = repository.create_equipment(db, request.model_dump())
    return EquipmentDto.from_entity(item)
