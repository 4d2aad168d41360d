from __future__ import annotations

from datetime import date as date_cls

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProgressCreateRequest(BaseModel):
    exercise_id: int | None = None
    weight: int | float | None = None
    date: date_cls | None = None

    @field_validator("exercise_id", "weight", "date", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProgressEntryResponse(BaseModel):
    """A progress row joined with its exercise's name and muscle group.

    ``date`` is returned as stored; the column is free text.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    exercise_id: int
    exercise_name: str
    muscle_group: str
    weight: float
    date: str


class ProgressCreateResponse(BaseModel):
    id: int
    exercise_id: int
    # int | float keeps an integral weight as submitted.
    weight: int | float
    date: date_cls
    message: str = "Progress added successfully"


class ChartPoint(BaseModel):
    date: str
    weight: float


class ChartSeries(BaseModel):
    label: str
    points: list[ChartPoint] = Field(default_factory=list)
