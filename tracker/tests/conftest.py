import os

# settings are read at import time; tests run against in-memory SQLite
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import tracker.models  # noqa

from tracker.db.base import Base
from tracker.db.session import get_db
from tracker.main import create_app
from tracker.models.enums import Role
from tracker.tests.factories import make_installation, make_project, make_task, make_user


@pytest.fixture(scope="function")
def engine():
    # services commit and roll back themselves; each test gets its own database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _fk_on(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c


@pytest.fixture
def manager(db):
    return make_user(db, Role.manager, name="Manager")


@pytest.fixture
def worker(db):
    return make_user(db, Role.worker, name="Worker One")


@pytest.fixture
def other_worker(db):
    return make_user(db, Role.worker, name="Worker Two")


@pytest.fixture
def project(db, manager):
    return make_project(db, manager)


@pytest.fixture
def task(db, project, worker):
    return make_task(db, project, assignee=worker)


@pytest.fixture
def installation(db, project, worker):
    return make_installation(db, project, assignee=worker)
