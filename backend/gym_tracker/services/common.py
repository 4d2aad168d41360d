from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gym_tracker.core.errors import StoreError

logger = logging.getLogger("gym_tracker.store")


def store_error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """Roll back and re-raise any store failure as a StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("store_failure error=%s", exc.__class__.__name__)
        raise StoreError(store_error_message(exc)) from exc
