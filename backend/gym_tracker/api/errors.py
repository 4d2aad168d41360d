from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gym_tracker.api.deps import get_request_id
from gym_tracker.core.errors import TrackerError
from gym_tracker.services.common import store_error_message

logger = logging.getLogger("gym_tracker.domain")


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{loc}: {message}" if loc else message)
    return "; ".join(parts) or "Invalid request"


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    logger.info(
        "domain_event event=request_rejected error=%s status_code=%s path=%s request_id=%s",
        exc.__class__.__name__,
        exc.status_code,
        request.url.path,
        get_request_id(request),
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _describe_validation_error(exc)},
    )


async def store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "domain_event event=store_failure path=%s request_id=%s",
        request.url.path,
        get_request_id(request),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": store_error_message(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)
