import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from gym_tracker.api.deps import get_db, get_request_id
from gym_tracker.core.errors import ConflictError
from gym_tracker.schemas.exercises import (
    ExerciseCreateRequest,
    ExerciseCreateResponse,
    ExerciseResponse,
)
from gym_tracker.services import exercises as exercise_service

router = APIRouter(prefix="/api/exercises", tags=["exercises"])
logger = logging.getLogger("gym_tracker.domain")


@router.get("", response_model=list[ExerciseResponse])
def list_exercises(db: Session = Depends(get_db)):
    return exercise_service.list_exercises(db)


@router.get("/muscle/{group}", response_model=list[ExerciseResponse])
def list_exercises_by_muscle_group(group: str, db: Session = Depends(get_db)):
    return exercise_service.list_exercises_by_muscle_group(db, group)


@router.post("", response_model=ExerciseCreateResponse)
def create_exercise(
    payload: ExerciseCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    try:
        exercise = exercise_service.add_exercise(db, payload.name, payload.muscle_group)
    except ConflictError:
        logger.info(
            "domain_event event=exercise_conflict name=%r muscle_group=%r request_id=%s",
            payload.name,
            payload.muscle_group,
            get_request_id(request),
        )
        raise

    logger.info(
        "domain_event event=exercise_created exercise_id=%s muscle_group=%r request_id=%s",
        exercise.id,
        exercise.muscle_group,
        get_request_id(request),
    )
    return ExerciseCreateResponse(
        id=exercise.id,
        name=exercise.name,
        muscle_group=exercise.muscle_group,
    )
