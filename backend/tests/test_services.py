from __future__ import annotations

from datetime import date
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from gym_tracker.core.errors import (
    ConflictError,
    ExerciseReferenceError,
    StoreError,
    ValidationError,
)
from gym_tracker.db.models.exercise import Exercise
from gym_tracker.db.models.progress import Progress
from gym_tracker.db.session import build_engine, build_session_factory, init_db
from gym_tracker.services import exercises as exercise_service
from gym_tracker.services import progress as progress_service


class ServiceTestBase(unittest.TestCase):
    def setUp(self):
        tmpdir = tempfile.mkdtemp(prefix="gym-tracker-svc-")
        self.addCleanup(shutil.rmtree, tmpdir, True)
        self.engine = build_engine(f"sqlite:///{Path(tmpdir) / 'svc.db'}")
        self.addCleanup(self.engine.dispose)
        init_db(self.engine)
        self.db = build_session_factory(self.engine)()
        self.addCleanup(self.db.close)


class ExerciseServiceTests(ServiceTestBase):
    def test_add_exercise_returns_generated_id(self):
        exercise = exercise_service.add_exercise(self.db, "Curl", "Biceps")
        self.assertIsNotNone(exercise.id)
        listed = exercise_service.list_exercises(self.db)
        self.assertEqual([(e.id, e.name) for e in listed], [(exercise.id, "Curl")])

    def test_add_exercise_validation(self):
        for name, group in (("", "Biceps"), ("Curl", ""), (None, "Biceps"), ("Curl", None)):
            with self.assertRaises(ValidationError):
                exercise_service.add_exercise(self.db, name, group)
        self.assertEqual(exercise_service.list_exercises(self.db), [])

    def test_add_exercise_conflict(self):
        exercise_service.add_exercise(self.db, "Curl", "Biceps")
        with self.assertRaises(ConflictError) as ctx:
            exercise_service.add_exercise(self.db, "Curl", "Biceps")
        self.assertEqual(ctx.exception.message, "Exercise already exists")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_unique_constraint_catches_lookup_race(self):
        # Simulates a concurrent insert landing between the lookup and our insert.
        exercise_service.add_exercise(self.db, "Curl", "Biceps")
        with patch.object(exercise_service, "find_exercise", return_value=None):
            with self.assertRaises(ConflictError):
                exercise_service.add_exercise(self.db, "Curl", "Biceps")
        count = self.db.execute(select(func.count(Exercise.id))).scalar_one()
        self.assertEqual(count, 1)

    def test_list_by_muscle_group_is_exact(self):
        exercise_service.add_exercise(self.db, "Skullcrusher", "Triceps")
        exercise_service.add_exercise(self.db, "Dips", "Triceps")
        exercise_service.add_exercise(self.db, "Curl", "Biceps")
        names = [e.name for e in exercise_service.list_exercises_by_muscle_group(self.db, "Triceps")]
        self.assertEqual(names, ["Dips", "Skullcrusher"])
        self.assertEqual(exercise_service.list_exercises_by_muscle_group(self.db, "triceps"), [])

    def test_store_failure_becomes_store_error(self):
        with self.engine.begin() as conn:
            conn.execute(text("DROP TABLE progress"))
            conn.execute(text("DROP TABLE exercises"))
        with self.assertRaises(StoreError) as ctx:
            exercise_service.list_exercises(self.db)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("exercises", ctx.exception.message)


class ProgressServiceTests(ServiceTestBase):
    def setUp(self):
        super().setUp()
        self.exercise = exercise_service.add_exercise(self.db, "Curl", "Biceps")

    def test_add_progress_and_read_joined_view(self):
        entry = progress_service.add_progress(self.db, self.exercise.id, 30.5, date(2024, 6, 1))
        self.assertEqual(entry.date, "2024-06-01")
        rows = progress_service.list_progress_for_exercise(self.db, self.exercise.id)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].exercise_name, "Curl")
        self.assertEqual(rows[0].muscle_group, "Biceps")
        self.assertEqual(rows[0].weight, 30.5)
        self.assertEqual(rows[0].date, "2024-06-01")

    def test_add_progress_validation(self):
        cases = (
            (None, 30, date(2024, 6, 1)),
            (self.exercise.id, None, date(2024, 6, 1)),
            (self.exercise.id, 30, None),
        )
        for exercise_id, weight, entry_date in cases:
            with self.assertRaises(ValidationError):
                progress_service.add_progress(self.db, exercise_id, weight, entry_date)

    def test_add_progress_unknown_exercise(self):
        with self.assertRaises(ExerciseReferenceError) as ctx:
            progress_service.add_progress(self.db, 999, 30, date(2024, 6, 1))
        self.assertEqual(ctx.exception.message, "Exercise does not exist")
        self.assertEqual(progress_service.list_progress(self.db), [])

    def test_foreign_key_enforced_by_store(self):
        self.db.add(Progress(exercise_id=999, weight=10, date="2024-06-01"))
        with self.assertRaises(IntegrityError):
            self.db.commit()
        self.db.rollback()

    def test_foreign_key_catches_lookup_race(self):
        with patch.object(self.db, "get", return_value=self.exercise):
            with self.assertRaises(ExerciseReferenceError):
                progress_service.add_progress(self.db, 999, 30, date(2024, 6, 1))
        self.assertEqual(progress_service.list_progress(self.db), [])

    def test_equal_dates_tie_break_on_id(self):
        first = progress_service.add_progress(self.db, self.exercise.id, 30, date(2024, 6, 1))
        second = progress_service.add_progress(self.db, self.exercise.id, 32, date(2024, 6, 1))
        self.assertEqual(
            [r.id for r in progress_service.list_progress(self.db)],
            [second.id, first.id],
        )
        self.assertEqual(
            [r.id for r in progress_service.list_progress_for_exercise(self.db, self.exercise.id)],
            [first.id, second.id],
        )
