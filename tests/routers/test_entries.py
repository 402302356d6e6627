import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quiz_api.db.database import get_db
from quiz_api.db.models import Base
from quiz_api.routers.entries import router as entries_router

app = FastAPI()
app.include_router(entries_router, prefix="/api/v1")

client = TestClient(app)


@pytest.fixture
def override_db():
    """Points the router at a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def _get_test_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()
    engine.dispose()


def test_create_entry(override_db):
    response = client.post("/api/v1/entries", json={"text": "hello"})
    assert response.status_code == 200
    body = response.json()
    assert body["text"] == "hello"
    assert isinstance(body["id"], int)
    assert body["created_at"]


def test_list_entries_newest_first(override_db):
    for text in ("first", "second", "third"):
        client.post("/api/v1/entries", json={"text": text})

    response = client.get("/api/v1/entries")
    assert response.status_code == 200
    assert [e["text"] for e in response.json()] == ["third", "second", "first"]


def test_list_entries_empty(override_db):
    response = client.get("/api/v1/entries")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": None}])
def test_create_entry_rejects_bad_payload(override_db, payload):
    response = client.post("/api/v1/entries", json=payload)
    assert response.status_code == 422
