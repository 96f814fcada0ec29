import os
import tempfile

# keep the suite off the real database and log directory
os.environ.setdefault("ROADRISK_DATABASE_URL", "sqlite://")
os.environ.setdefault("ROADRISK_LOG_DIR", os.path.join(tempfile.gettempdir(), "roadrisk-test-logs"))
os.environ.setdefault("ROADRISK_SEED_ON_START", "false")

import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.roadrisk import hospital_lookup
from backend.roadrisk.db_models import get_db, init_db
from backend.roadrisk.main import app


@pytest.fixture(autouse=True)
def offline_mirrors(monkeypatch):
    """No test talks to a real Overpass mirror unless it patches requests.post itself."""
    def _refuse(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr(hospital_lookup.requests, "post", _refuse)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def _override():
        yield db_session

    app.dependency_overrides[get_db] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
