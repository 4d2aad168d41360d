"""Display rules shared by the web page and the Python client.

Everything here is pure: it takes rows as the endpoints return them (already
ordered by the store) and derives what the progress views show.
"""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import date as date_cls

from gym_tracker.schemas.progress import ChartPoint, ChartSeries, ProgressEntryResponse

MUSCLE_GROUPS = ("Biceps", "Triceps", "Back", "Chest", "Shoulders", "Legs")

ALL = "all"
RECENT_PROGRESS_LIMIT = 10

ALL_TIME = "all-time"
TIME_RANGES = {
    ALL_TIME: "All Time",
    "last-month": "Last Month",
    "last-3-months": "Last 3 Months",
    "last-6-months": "Last 6 Months",
}
_TIME_RANGE_MONTHS = {
    "last-month": 1,
    "last-3-months": 3,
    "last-6-months": 6,
}


def exercise_label(name: str, muscle_group: str) -> str:
    return f"{name} ({muscle_group})"


def recent_progress(entries: Sequence[ProgressEntryResponse]) -> list[ProgressEntryResponse]:
    # Prefix slice only; relies on the most-recent-first ordering of the list endpoint.
    return list(entries[:RECENT_PROGRESS_LIMIT])


def subtract_months(day: date_cls, months: int) -> date_cls:
    """Step back whole calendar months, clamping to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date_cls(year, month, min(day.day, last_day))


def time_range_cutoff(time_range: str, today: date_cls) -> date_cls | None:
    months = _TIME_RANGE_MONTHS.get(time_range)
    if months is None:
        return None
    return subtract_months(today, months)


def entry_day(value: str) -> date_cls | None:
    """Calendar day of a stored date, or None when the text is not an ISO date.

    Only the leading ``YYYY-MM-DD`` is read, so timestamps stored as text still
    place on their day.
    """
    try:
        return date_cls.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def filter_by_time_range(
    entries: Sequence[ProgressEntryResponse],
    time_range: str,
    today: date_cls | None = None,
) -> list[ProgressEntryResponse]:
    """Drop entries dated strictly before the cutoff; unknown ranges mean all time.

    Entries whose date cannot be read are dropped from any bounded range.
    """
    cutoff = time_range_cutoff(time_range, today or date_cls.today())
    if cutoff is None:
        return list(entries)
    kept = []
    for entry in entries:
        day = entry_day(entry.date)
        if day is not None and day >= cutoff:
            kept.append(entry)
    return kept


def group_by_exercise(entries: Sequence[ProgressEntryResponse]) -> list[ChartSeries]:
    series: dict[str, ChartSeries] = {}
    for entry in entries:
        label = exercise_label(entry.exercise_name, entry.muscle_group)
        if label not in series:
            series[label] = ChartSeries(label=label)
        series[label].points.append(ChartPoint(date=entry.date, weight=entry.weight))
    return list(series.values())


def parse_exercise_choice(value: int | str | None) -> int | str:
    """An exercise id, or ALL for "all", blanks and anything non-numeric."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value or "").strip()
    return int(text) if text.isdigit() else ALL


def chart_source(muscle_group: str = ALL, exercise_id: int | str | None = ALL) -> tuple[str, int | str | None]:
    """Pick which listing feeds the chart.

    A specific exercise wins over a muscle group; with neither selected the
    chart draws from every entry.
    """
    choice = parse_exercise_choice(exercise_id)
    if choice != ALL:
        return "exercise", choice
    if muscle_group != ALL and muscle_group:
        return "muscle", muscle_group
    return ALL, None
