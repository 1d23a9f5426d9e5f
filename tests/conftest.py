"""Shared test fixtures.

Settings are read from the environment at import time, so the required
variables are set before anything under ``app`` is imported.
"""

import os

os.environ.setdefault("FI_AUTH_USERNAME", "admin")
os.environ.setdefault("FI_AUTH_PASSWORD", "test-password")
os.environ.setdefault("FI_JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")

from collections.abc import Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from pydantic import BaseModel  # noqa: E402

from app.config import settings  # noqa: E402
from app.main import app  # noqa: E402

# ===================
# IN-MEMORY REPOSITORY
# ===================


class InMemoryStore:
    """Minimal stand-in for a repository: list_existing/create plus id-keyed rows."""

    def __init__(self, rows: list[dict] | None = None, fail_on: set[str] | None = None):
        self.rows: list[dict] = list(rows or [])
        self.fail_on = fail_on or set()
        self.created: list[BaseModel] = []

    async def list_all(self) -> list[dict]:
        return list(self.rows)

    async def create(self, data: BaseModel) -> dict:
        values = data.model_dump()
        if values.get("name") in self.fail_on:
            raise RuntimeError(f"insert failed for {values['name']}")
        row = {"id": len(self.rows) + 1, **values}
        self.rows.append(row)
        self.created.append(data)
        return row


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


# ===================
# HTTP CLIENT
# ===================


@pytest.fixture
def client(tmp_path, monkeypatch) -> Iterator[TestClient]:
    monkeypatch.setattr(settings, "db_path", str(tmp_path / "inventory.db"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    response = client.post(
        "/api/v1/auth/login",
        json={"username": settings.auth_username, "password": settings.auth_password},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
