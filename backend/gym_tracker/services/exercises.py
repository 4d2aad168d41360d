from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gym_tracker.core.errors import ConflictError, ValidationError
from gym_tracker.db.models.exercise import EXERCISE_UNIQUE_CONSTRAINT, Exercise
from gym_tracker.services.common import store_errors

FIELDS_REQUIRED = "Exercise name and muscle group are required"
ALREADY_EXISTS = "Exercise already exists"

# SQLite reports the offending columns instead of the constraint name.
_SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed: exercises.name, exercises.muscle_group"


def _is_exercise_conflict(exc: IntegrityError) -> bool:
    diag = getattr(exc.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if constraint_name == EXERCISE_UNIQUE_CONSTRAINT:
        return True
    message = str(exc.orig)
    return EXERCISE_UNIQUE_CONSTRAINT in message or _SQLITE_UNIQUE_MESSAGE in message


def list_exercises(db: Session) -> list[Exercise]:
    with store_errors(db):
        return list(
            db.execute(
                select(Exercise).order_by(Exercise.muscle_group.asc(), Exercise.name.asc())
            ).scalars()
        )


def list_exercises_by_muscle_group(db: Session, muscle_group: str) -> list[Exercise]:
    with store_errors(db):
        return list(
            db.execute(
                select(Exercise)
                .where(Exercise.muscle_group == muscle_group)
                .order_by(Exercise.name.asc())
            ).scalars()
        )


def find_exercise(db: Session, name: str, muscle_group: str) -> Exercise | None:
    # Exact match: no case folding or whitespace trimming.
    with store_errors(db):
        return db.execute(
            select(Exercise).where(
                Exercise.name == name,
                Exercise.muscle_group == muscle_group,
            )
        ).scalar_one_or_none()


def add_exercise(db: Session, name: str | None, muscle_group: str | None) -> Exercise:
    if not name or not muscle_group:
        raise ValidationError(FIELDS_REQUIRED)

    if find_exercise(db, name, muscle_group) is not None:
        raise ConflictError(ALREADY_EXISTS)

    exercise = Exercise(name=name, muscle_group=muscle_group)
    with store_errors(db):
        # The unique constraint catches a concurrent insert that slipped past the lookup.
        try:
            db.add(exercise)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if _is_exercise_conflict(exc):
                raise ConflictError(ALREADY_EXISTS) from None
            raise
        db.refresh(exercise)
    return exercise
