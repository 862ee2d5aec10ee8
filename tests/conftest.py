import os
import tempfile

# 必須在 import app 之前設定：測試一律用 in-memory sqlite
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "meeting-room-test-logs"))

import pytest
from fastapi.testclient import TestClient

from app.database import Base, engine
from app.main import app


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_booking(client):
    def _make(start, end, purpose="Standup", pic="Alice", **extra):
        payload = {"purpose": purpose, "pic": pic, "startTime": start, "endTime": end}
        payload.update(extra)
        return client.post("/api/bookings", json=payload)
    return _make


@pytest.fixture
def auth_headers(client):
    client.post(
        "/api/users/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
    )
    resp = client.post(
        "/api/users/login",
        json={"email": "alice@example.com", "password": "secret123"},
    )
    return {"Authorization": f"Bearer {resp.json()['token']}"}
