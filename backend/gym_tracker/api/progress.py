import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from gym_tracker.api.deps import get_db, get_request_id
from gym_tracker.core.errors import ExerciseReferenceError
from gym_tracker.schemas.progress import (
    ProgressCreateRequest,
    ProgressCreateResponse,
    ProgressEntryResponse,
)
from gym_tracker.services import progress as progress_service

router = APIRouter(prefix="/api/progress", tags=["progress"])
logger = logging.getLogger("gym_tracker.domain")


@router.get("", response_model=list[ProgressEntryResponse])
def list_progress(db: Session = Depends(get_db)):
    return progress_service.list_progress(db)


@router.get("/exercise/{exercise_id}", response_model=list[ProgressEntryResponse])
def list_progress_for_exercise(exercise_id: int, db: Session = Depends(get_db)):
    return progress_service.list_progress_for_exercise(db, exercise_id)


@router.get("/muscle/{group}", response_model=list[ProgressEntryResponse])
def list_progress_by_muscle_group(group: str, db: Session = Depends(get_db)):
    return progress_service.list_progress_by_muscle_group(db, group)


@router.post("", response_model=ProgressCreateResponse)
def create_progress(
    payload: ProgressCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    try:
        entry = progress_service.add_progress(db, payload.exercise_id, payload.weight, payload.date)
    except ExerciseReferenceError:
        logger.info(
            "domain_event event=progress_rejected reason=unknown_exercise exercise_id=%s request_id=%s",
            payload.exercise_id,
            get_request_id(request),
        )
        raise

    logger.info(
        "domain_event event=progress_created progress_id=%s exercise_id=%s date=%s request_id=%s",
        entry.id,
        entry.exercise_id,
        entry.date,
        get_request_id(request),
    )
    return ProgressCreateResponse(
        id=entry.id,
        exercise_id=entry.exercise_id,
        weight=payload.weight,
        date=entry.date,
    )
