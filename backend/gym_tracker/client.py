"""REST client for the gym tracker API.

Progress rows come back as :class:`ProgressEntryResponse` models so the display
rules in :mod:`gym_tracker.views.progress` apply to them unchanged.
"""

from __future__ import annotations

from datetime import date as date_cls
from typing import Any
from urllib.parse import quote

import requests

from gym_tracker.schemas.exercises import ExerciseResponse
from gym_tracker.schemas.progress import ChartSeries, ProgressEntryResponse
from gym_tracker.views.progress import (
    ALL,
    ALL_TIME,
    chart_source,
    filter_by_time_range,
    group_by_exercise,
    recent_progress,
)


class TrackerClientError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TrackerClient:
    """Simple REST client for the exercise and progress endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _check(self, resp: requests.Response) -> Any:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not resp.ok:
            message = body.get("error") if isinstance(body, dict) else None
            raise TrackerClientError(resp.status_code, message or resp.reason or "Request failed")
        return body

    def _get(self, path: str) -> Any:
        return self._check(self.session.get(f"{self.base_url}{path}"))

    def _post(self, path: str, payload: dict) -> dict:
        return self._check(self.session.post(f"{self.base_url}{path}", json=payload))

    def list_exercises(self) -> list[ExerciseResponse]:
        return [ExerciseResponse.model_validate(row) for row in self._get("/api/exercises")]

    def list_exercises_by_muscle_group(self, muscle_group: str) -> list[ExerciseResponse]:
        rows = self._get(f"/api/exercises/muscle/{quote(muscle_group, safe='')}")
        return [ExerciseResponse.model_validate(row) for row in rows]

    def add_exercise(self, name: str, muscle_group: str) -> dict:
        return self._post("/api/exercises", {"name": name, "muscle_group": muscle_group})

    def list_progress(self) -> list[ProgressEntryResponse]:
        return self._progress("/api/progress")

    def list_progress_for_exercise(self, exercise_id: int) -> list[ProgressEntryResponse]:
        return self._progress(f"/api/progress/exercise/{int(exercise_id)}")

    def list_progress_by_muscle_group(self, muscle_group: str) -> list[ProgressEntryResponse]:
        return self._progress(f"/api/progress/muscle/{quote(muscle_group, safe='')}")

    def add_progress(self, exercise_id: int, weight: float, entry_date: date_cls | str) -> dict:
        if isinstance(entry_date, date_cls):
            entry_date = entry_date.isoformat()
        return self._post(
            "/api/progress",
            {"exercise_id": exercise_id, "weight": weight, "date": entry_date},
        )

    def _progress(self, path: str) -> list[ProgressEntryResponse]:
        return [ProgressEntryResponse.model_validate(row) for row in self._get(path)]

    def recent_progress(self) -> list[ProgressEntryResponse]:
        return recent_progress(self.list_progress())

    def chart(
        self,
        muscle_group: str = ALL,
        exercise_id: int | str = ALL,
        time_range: str = ALL_TIME,
        today: date_cls | None = None,
    ) -> list[ChartSeries]:
        source, key = chart_source(muscle_group, exercise_id)
        if source == "exercise":
            entries = self.list_progress_for_exercise(key)
        elif source == "muscle":
            entries = self.list_progress_by_muscle_group(key)
        else:
            entries = self.list_progress()
        return group_by_exercise(filter_by_time_range(entries, time_range, today))
