from __future__ import annotations

from datetime import date as date_cls
import logging
from pathlib import Path
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from gym_tracker.api.deps import get_db, get_request_id
from gym_tracker.core.errors import TrackerError
from gym_tracker.schemas.progress import ProgressEntryResponse
from gym_tracker.services import exercises as exercise_service
from gym_tracker.services import progress as progress_service
from gym_tracker.views.progress import (
    ALL,
    ALL_TIME,
    MUSCLE_GROUPS,
    TIME_RANGES,
    chart_source,
    exercise_label,
    filter_by_time_range,
    group_by_exercise,
    parse_exercise_choice,
    recent_progress,
)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["exercise_label"] = exercise_label
logger = logging.getLogger("gym_tracker.domain")

TABS = (
    ("add-exercise", "Add Exercise"),
    ("record-progress", "Record Progress"),
    ("view-progress", "View Progress"),
)
DEFAULT_TAB = TABS[0][0]
NO_CHART_DATA = "No data available for the selected filters."
INVALID_PROGRESS_FORM = "Please select an exercise, enter a weight, and select a date."


def _redirect(tab: str, message: str, level: str) -> RedirectResponse:
    query = urlencode({"tab": tab, "notice": message, "level": level})
    return RedirectResponse(f"/?{query}", status_code=status.HTTP_303_SEE_OTHER)


def _fetch_chart_entries(db: Session, muscle_group: str, exercise_id: int | str) -> list[ProgressEntryResponse]:
    source, key = chart_source(muscle_group, exercise_id)
    if source == "exercise":
        return progress_service.list_progress_for_exercise(db, key)
    if source == "muscle":
        return progress_service.list_progress_by_muscle_group(db, key)
    return progress_service.list_progress(db)


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    tab: str = DEFAULT_TAB,
    notice: str | None = None,
    level: str = "success",
    muscle_group: str = ALL,
    exercise_id: str = ALL,
    time_range: str = ALL_TIME,
    generate: bool = False,
    db: Session = Depends(get_db),
):
    active_tab = tab if tab in dict(TABS) else DEFAULT_TAB
    alerts = []
    if notice:
        alerts.append({"message": notice, "level": "error" if level == "error" else "success"})

    exercises = exercise_service.list_exercises(db)
    if muscle_group == ALL:
        chart_exercises = exercises
    else:
        chart_exercises = exercise_service.list_exercises_by_muscle_group(db, muscle_group)
    selected_exercise = parse_exercise_choice(exercise_id)

    chart = None
    if generate:
        entries = filter_by_time_range(
            _fetch_chart_entries(db, muscle_group, selected_exercise),
            time_range,
        )
        if entries:
            chart = group_by_exercise(entries)
        else:
            alerts.append({"message": NO_CHART_DATA, "level": "error"})

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "tabs": TABS,
            "active_tab": active_tab,
            "alerts": alerts,
            "muscle_groups": MUSCLE_GROUPS,
            "time_ranges": TIME_RANGES,
            "exercises": exercises,
            "recent_progress": recent_progress(progress_service.list_progress(db)),
            "chart_exercises": chart_exercises,
            "chart": chart,
            "selected_muscle_group": muscle_group,
            "selected_exercise": selected_exercise,
            "selected_time_range": time_range,
            "today": date_cls.today().isoformat(),
        },
    )


@router.post("/forms/exercises")
def submit_exercise(
    request: Request,
    name: str = Form(""),
    muscle_group: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        exercise = exercise_service.add_exercise(db, name.strip(), muscle_group)
    except TrackerError as exc:
        return _redirect("add-exercise", exc.message, "error")

    logger.info(
        "domain_event event=exercise_created exercise_id=%s muscle_group=%r source=form request_id=%s",
        exercise.id,
        exercise.muscle_group,
        get_request_id(request),
    )
    return _redirect("add-exercise", "Exercise added successfully!", "success")


@router.post("/forms/progress")
def submit_progress(
    request: Request,
    exercise_id: str = Form(""),
    weight: str = Form(""),
    date: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        parsed_exercise_id = int(exercise_id) if exercise_id.strip() else None
        parsed_weight = float(weight) if weight.strip() else None
        parsed_date = date_cls.fromisoformat(date) if date.strip() else None
    except ValueError:
        return _redirect("record-progress", INVALID_PROGRESS_FORM, "error")

    try:
        entry = progress_service.add_progress(db, parsed_exercise_id, parsed_weight, parsed_date)
    except TrackerError as exc:
        return _redirect("record-progress", exc.message, "error")

    logger.info(
        "domain_event event=progress_created progress_id=%s exercise_id=%s source=form request_id=%s",
        entry.id,
        entry.exercise_id,
        get_request_id(request),
    )
    return _redirect("record-progress", "Progress added successfully!", "success")
