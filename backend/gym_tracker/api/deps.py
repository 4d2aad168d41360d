from fastapi import Request

from gym_tracker.db.session import get_db  # noqa: F401


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
