import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

access_logger = logging.getLogger("tracker.access")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Request correlation and access log.

    - accepts the configured header (default X-Request-Id) or generates an id
    - exposes it as request.state.request_id and echoes it on the response
    - writes one "request completed" line per request with status, timing and
      the authenticated principal (set by get_current_principal), if any
    """

    def __init__(self, app, header_name: str = "X-Request-Id", log_requests: bool = True):
        super().__init__(app)
        self.header_name = header_name
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = rid
        started = time.perf_counter()

        response = await call_next(request)
        response.headers[self.header_name] = rid

        if self.log_requests:
            principal = getattr(request.state, "principal", None)
            access_logger.info(
                "request completed",
                extra={
                    "request_id": rid,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                    "principal_id": getattr(principal, "user_id", None),
                    "role": getattr(getattr(principal, "role", None), "value", None),
                },
            )
        return response
