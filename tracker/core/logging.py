import logging
import sys
from pythonjsonlogger import jsonlogger
from tracker.core.config import Settings

# (logger, minimum level)
_NOISY_LOGGERS = (
    ("uvicorn.access", logging.WARNING),  # replaced by tracker.access
    ("passlib", logging.ERROR),
)


def configure_logging(settings: Settings) -> None:
    """
    JSON lines on stdout. Every record carries the app name and environment
    so lines from several deployments can share one sink.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            static_fields={"app": settings.app_name, "env": settings.environment},
        )
    )
    root.addHandler(handler)

    logging.getLogger("tracker").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    for name, quiet in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, quiet))

    # SQL statements only when explicitly asked for
    sql_level = logging.INFO if settings.database_echo else max(level, logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
