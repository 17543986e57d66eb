# tracker/services/store.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.core.errors import NotFound, StoreError

logger = logging.getLogger("tracker.store")

M = TypeVar("M")


def now():
    return datetime.now(timezone.utc)


def as_uuid(value) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def get_or_404(db: Session, model: Type[M], row_id, label: str) -> M:
    row = db.get(model, as_uuid(row_id))
    if row is None:
        raise NotFound(f"{label} not found.")
    return row


def commit(db: Session) -> None:
    """
    Commit the unit of work. Store faults are rolled back and surfaced as
    StoreError; the driver message is logged, never returned to the caller.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("store commit failed", extra={"error": str(e)})
        raise StoreError() from e
