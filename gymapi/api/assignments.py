"""Assignment API endpoints.

Assignments are set by a trainer for one member, or for all members when no
member is given.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from gymapi.api.schemas import AssignmentCreate, AssignmentDto
from gymapi.core.problems import problem_response
from gymapi.db import repository
from gymapi.db.errors import EntityNotFoundError
from gymapi.db.session import get_db

router = APIRouter(prefix="/assignments", tags=["assignments"])

MAX_PAGE_SIZE = 100


@router.get("", response_model=list[AssignmentDto])
def get_assignments(
    trainer_id: str | None = Query(default=None, alias="trainerId"),
    member_id: str | None = Query(default=None, alias="memberId"),
    is_public: bool | None = Query(default=None, alias="isPublic"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
) -> list[AssignmentDto]:
    assignments = repository.list_assignments(
        db,
        trainer_id=trainer_id,
        member_id=member_id,
        is_public=is_public,
        page=page,
        page_size=page_size,
    )
    return [AssignmentDto.from_entity(assignment) for assignment in assignments]


@router.get("/{assignment_id}", response_model=AssignmentDto)
def get_assignment_by_id(assignment_id: str, db: Session = Depends(get_db)) -> AssignmentDto:
    return AssignmentDto.from_entity(repository.get_assignment(db, assignment_id))


@router.post("", response_model=AssignmentDto, status_code=status.HTTP_201_CREATED)
def create_assignment(
    request: AssignmentCreate,
    response: Response,
    db: Session = Depends(get_db),
) -> AssignmentDto | JSONResponse:
    logger.info("POST /assignments endpoint called", trainer_id=request.trainer_id)
    try:
        assignment = repository.create_assignment(db, request.model_dump())
    except EntityNotFoundError as e:
        # Unknown trainer or member id in the payload -> 400
        return problem_response(status.HTTP_400_BAD_REQUEST, "Invalid assignment", str(e))
    response.headers["Location"] = f"{router.prefix}/{assignment.id}"
    return AssignmentDto.from_entity(assignment)
