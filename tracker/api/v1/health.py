import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.db.session import get_db

logger = logging.getLogger("tracker.health")

router = APIRouter()


@router.get("/health")
def health(request: Request, db: Session = Depends(get_db)):
    """Liveness plus a round trip to the database. No auth."""
    rid = getattr(request.state, "request_id", None)
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("database unreachable", extra={"request_id": rid, "error": str(e)})
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "database": "unavailable", "request_id": rid},
        )
    return {"status": "ok", "database": "ok", "request_id": rid}
