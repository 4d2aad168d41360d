from __future__ import annotations

from datetime import date as date_cls
import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gym_tracker.core.errors import ExerciseReferenceError, StoreError, ValidationError
from gym_tracker.db.models.exercise import Exercise
from gym_tracker.db.models.progress import Progress
from gym_tracker.schemas.progress import ProgressEntryResponse
from gym_tracker.services.common import store_errors

FIELDS_REQUIRED = "Exercise ID, weight, and date are required"
UNKNOWN_EXERCISE = "Exercise does not exist"

logger = logging.getLogger("gym_tracker.store")


def _joined() -> Select:
    return select(
        Progress.id,
        Progress.exercise_id,
        Exercise.name.label("exercise_name"),
        Exercise.muscle_group,
        Progress.weight,
        Progress.date,
    ).join(Exercise, Exercise.id == Progress.exercise_id)


def _fetch(db: Session, stmt: Select) -> list[ProgressEntryResponse]:
    with store_errors(db):
        rows = db.execute(stmt).all()
    try:
        return [ProgressEntryResponse.model_validate(dict(row._mapping)) for row in rows]
    except PydanticValidationError as exc:
        logger.error("store_failure error=unreadable_progress_row detail=%s", exc.errors()[0].get("msg"))
        raise StoreError("Stored progress entry could not be read") from exc


def list_progress(db: Session) -> list[ProgressEntryResponse]:
    """All entries, most recent first."""
    return _fetch(db, _joined().order_by(Progress.date.desc(), Progress.id.desc()))


def list_progress_for_exercise(db: Session, exercise_id: int) -> list[ProgressEntryResponse]:
    """Entries for one exercise, oldest first for charting."""
    return _fetch(
        db,
        _joined()
        .where(Progress.exercise_id == exercise_id)
        .order_by(Progress.date.asc(), Progress.id.asc()),
    )


def list_progress_by_muscle_group(db: Session, muscle_group: str) -> list[ProgressEntryResponse]:
    return _fetch(
        db,
        _joined()
        .where(Exercise.muscle_group == muscle_group)
        .order_by(Exercise.name.asc(), Progress.date.asc(), Progress.id.asc()),
    )


def add_progress(
    db: Session,
    exercise_id: int | None,
    weight: float | None,
    entry_date: date_cls | None,
) -> Progress:
    # A weight of 0 is a value, not a missing field.
    if exercise_id is None or weight is None or entry_date is None:
        raise ValidationError(FIELDS_REQUIRED)

    with store_errors(db):
        exercise = db.get(Exercise, exercise_id)
    if exercise is None:
        raise ExerciseReferenceError(UNKNOWN_EXERCISE)

    entry = Progress(exercise_id=exercise_id, weight=weight, date=entry_date.isoformat())
    with store_errors(db):
        try:
            db.add(entry)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if "FOREIGN KEY" in str(exc.orig).upper():
                raise ExerciseReferenceError(UNKNOWN_EXERCISE) from None
            raise
        db.refresh(entry)
    return entry
