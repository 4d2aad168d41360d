from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ExerciseCreateRequest(BaseModel):
    # Presence is checked by the command layer so that a missing field is a 400, not a 422.
    name: str | None = None
    muscle_group: str | None = None


class ExerciseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    muscle_group: str


class ExerciseCreateResponse(ExerciseResponse):
    message: str = "Exercise added successfully"
