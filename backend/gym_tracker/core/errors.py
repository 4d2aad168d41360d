"""Domain errors raised by the query/command layer.

Each error carries the HTTP status it maps to at the API boundary, where it is
rendered as ``{"error": message}``.
"""

from fastapi import status


class TrackerError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """A required field is missing or empty."""


class ConflictError(TrackerError):
    """An exercise with the same name and muscle group already exists."""


class ExerciseReferenceError(TrackerError):
    """A progress entry points at an exercise that does not exist."""


class StoreError(TrackerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
