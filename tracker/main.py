from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.api.v1.router import v1_router
from tracker.core.config import get_settings
from tracker.core.exception_handlers import register_exception_handlers
from tracker.core.logging import configure_logging
from tracker.core.middleware import RequestIdMiddleware


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Middleware: request id + access log
    app.add_middleware(
        RequestIdMiddleware,
        header_name=settings.request_id_header,
        log_requests=settings.access_log,
    )

    register_exception_handlers(app)

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()
