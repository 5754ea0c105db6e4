import os

# Must be set before app.config is imported
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_ENABLED", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import init_db
from app.main import app
from app.services.storage import MemoryStorage, DatabaseStorage, get_storage

AUTH_HEADERS = {
    "X-Auth-User-Id": "user-123",
    "X-Auth-Email": "trader@example.com",
    "X-Auth-First-Name": "Ada",
    "X-Auth-Last-Name": "Lovelace",
}


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app, headers=AUTH_HEADERS)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(bind=engine)
    db = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    yield db
    db.close()
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def any_storage(request):
    """Runs a test against both store implementations."""
    if request.param == "memory":
        yield MemoryStorage()
    else:
        yield DatabaseStorage(request.getfixturevalue("db_session"))
