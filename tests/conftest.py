"""Shared fixtures: the API runs against a fresh in-memory SQLite database."""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Iterator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, engine  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_post(client: TestClient):
    """Create a post through the API and return its data."""

    def _make_post(**overrides: Any) -> dict[str, Any]:
        payload = {"title": "A", "content": "B", "author": "C", **overrides}
        response = client.post("/api/posts", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_post
