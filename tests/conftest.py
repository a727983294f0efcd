# tests/conftest.py
# Shared pytest fixtures for the listwikis tests

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from listwikis import models
from listwikis.crud import SETTING_NAMES as SETTINGS
from listwikis.database import Base, get_db
from listwikis.main import app
from listwikis.result import ApiResult
from listwikis.schemas import CallerContext


def ts(day: int) -> str:
    """TS_MW timestamp for a day in January 2013."""
    return f"201301{day:02d}120000"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Temporary in-memory database session."""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_wiki(session):
    """Insert a wiki_list row plus its settings. Timestamp defaults to day ``wid``."""

    def _add(wid, timestamp=None, deleted=False, **settings):
        session.add(models.WikiList(wl_id=wid, wl_timestamp=timestamp or ts(wid), wl_deleted=int(deleted)))
        settings.setdefault("subdomain", f"wiki{wid}")
        settings.setdefault("type", "public")
        for field, value in settings.items():
            if value is None:
                continue
            session.add(models.WikiSetting(ws_wiki=wid, ws_setting=SETTINGS[field], ws_value=value))
        session.commit()

    return _add


@pytest.fixture
def anon():
    return CallerContext()


@pytest.fixture
def staff():
    return CallerContext(user="Jack Phoenix", groups=["*", "user", "staff"])


@pytest.fixture
def result():
    return ApiResult()


@pytest.fixture
def client(engine):
    SessionLocal = sessionmaker(bind=engine)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
