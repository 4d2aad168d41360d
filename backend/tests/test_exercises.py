from __future__ import annotations

from sqlalchemy import func, select

from gym_tracker.db.models.exercise import Exercise
from tests.base import BackendTestBase


class ExerciseEndpointTests(BackendTestBase):
    def _exercise_count(self) -> int:
        with self._session() as db:
            return db.execute(select(func.count(Exercise.id))).scalar_one()

    def test_create_exercise_contract(self):
        self._info("Checks POST /api/exercises echoes fields plus generated id and message.")
        status, body = self._request(
            "POST",
            "/api/exercises",
            payload={"name": "Bench Press", "muscle_group": "Chest"},
        )
        self.assertEqual(status, 200, body)
        self.assertIsInstance(body["id"], int)
        self.assertEqual(body["name"], "Bench Press")
        self.assertEqual(body["muscle_group"], "Chest")
        self.assertEqual(body["message"], "Exercise added successfully")

        status_list, items = self._request("GET", "/api/exercises")
        self.assertEqual(status_list, 200)
        self.assertEqual([i["id"] for i in items].count(body["id"]), 1)
        self._pass("200 with id and listed exactly once", body, received_payload=items)

    def test_duplicate_exercise_rejected(self):
        self._info("Checks a repeated (name, muscle_group) pair is a 400 and stores nothing.")
        self._create_exercise("Bench Press", "Chest")
        before = self._exercise_count()

        status, body = self._request(
            "POST",
            "/api/exercises",
            payload={"name": "Bench Press", "muscle_group": "Chest"},
        )
        self.assertEqual(status, 400)
        self.assertEqual(body, {"error": "Exercise already exists"})
        self.assertEqual(self._exercise_count(), before)
        self._pass("400 Exercise already exists", body)

    def test_same_name_in_other_group_allowed(self):
        self._info("Checks uniqueness is on the pair, not the name alone.")
        first = self._create_exercise("Dips", "Chest")
        second = self._create_exercise("Dips", "Triceps")
        self.assertNotEqual(first["id"], second["id"])

    def test_duplicate_check_is_case_and_whitespace_sensitive(self):
        self._info("Checks no normalization is applied to names before the duplicate check.")
        self._create_exercise("Bench Press", "Chest")
        self._create_exercise("bench press", "Chest")
        self._create_exercise("Bench Press ", "Chest")
        self._create_exercise("Bench Press", "chest")
        self.assertEqual(self._exercise_count(), 4)

    def test_missing_fields_rejected(self):
        self._info("Checks empty or absent name/muscle_group is a 400 with no store mutation.")
        payloads = [
            {"name": "", "muscle_group": "Chest"},
            {"name": "Bench Press", "muscle_group": ""},
            {"name": "Bench Press"},
            {"muscle_group": "Chest"},
            {},
        ]
        for payload in payloads:
            status, body = self._request("POST", "/api/exercises", payload=payload)
            self.assertEqual(status, 400, payload)
            self.assertEqual(body, {"error": "Exercise name and muscle group are required"})
        self.assertEqual(self._exercise_count(), 0)

    def test_free_text_muscle_group_accepted(self):
        body = self._create_exercise("Plank", "Core")
        self.assertEqual(body["muscle_group"], "Core")

    def test_list_ordered_by_muscle_group_then_name(self):
        self._info("Checks GET /api/exercises orders by muscle_group then name.")
        self._create_exercise("Squat", "Legs")
        self._create_exercise("Row", "Back")
        self._create_exercise("Bench Press", "Chest")
        self._create_exercise("Deadlift", "Back")
        self._create_exercise("Lunge", "Legs")

        status, items = self._request("GET", "/api/exercises")
        self.assertEqual(status, 200)
        self.assertEqual(
            [(i["muscle_group"], i["name"]) for i in items],
            [
                ("Back", "Deadlift"),
                ("Back", "Row"),
                ("Chest", "Bench Press"),
                ("Legs", "Lunge"),
                ("Legs", "Squat"),
            ],
        )
        self.assertEqual(set(items[0]), {"id", "name", "muscle_group"})

    def test_list_by_muscle_group(self):
        self._info("Checks GET /api/exercises/muscle/{group} filters exactly and orders by name.")
        self._create_exercise("Pull Up", "Back")
        self._create_exercise("Bench Press", "Chest")
        self._create_exercise("Deadlift", "Back")

        status, items = self._request("GET", "/api/exercises/muscle/Back")
        self.assertEqual(status, 200)
        self.assertEqual([i["name"] for i in items], ["Deadlift", "Pull Up"])

        status_lower, items_lower = self._request("GET", "/api/exercises/muscle/back")
        self.assertEqual(status_lower, 200)
        self.assertEqual(items_lower, [])

        status_none, items_none = self._request("GET", "/api/exercises/muscle/Legs")
        self.assertEqual(status_none, 200)
        self.assertEqual(items_none, [])

    def test_list_empty_store(self):
        status, items = self._request("GET", "/api/exercises")
        self.assertEqual(status, 200)
        self.assertEqual(items, [])
