# tracker/core/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tracker.core.errors import Reason, TrackerError

logger = logging.getLogger("tracker.errors")


def _body(reason: Reason, detail, request: Request) -> dict:
    return {
        "error": reason.value,
        "detail": detail,
        "request_id": getattr(request.state, "request_id", None),
    }


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "internal error",
            exc_info=exc.__cause__ or exc,
            extra={"path": request.url.path, "request_id": getattr(request.state, "request_id", None)},
        )
    else:
        logger.info(
            "request denied",
            extra={
                "reason": exc.reason.value,
                "path": request.url.path,
                "principal_id": getattr(getattr(request.state, "principal", None), "user_id", None),
                "request_id": getattr(request.state, "request_id", None),
            },
        )
    return JSONResponse(status_code=exc.status_code, content=_body(exc.reason, exc.message, request))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # field locations only; raw input values stay out of the response
    fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content=_body(Reason.INVALID_PAYLOAD, f"Invalid request payload: {', '.join(fields)}", request),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled error",
        extra={"path": request.url.path, "request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(
        status_code=500,
        content=_body(Reason.INTERNAL_ERROR, "Internal server error.", request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
