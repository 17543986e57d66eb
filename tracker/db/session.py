from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tracker.core.config import Settings, get_settings


def engine_options(settings: Settings) -> Dict[str, Any]:
    """
    PostgreSQL in deployment, SQLite for local runs and tests. SQLite
    connections are handed across the threadpool FastAPI runs sync
    handlers in, so the same-thread check is turned off there.
    """
    options: Dict[str, Any] = {"echo": settings.database_echo, "future": True}
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


settings = get_settings()

engine = create_engine(settings.database_url, **engine_options(settings))

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_db():
    """One session per request; services commit or roll back themselves."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
