"""HTTP API tests."""

from __future__ import annotations

import pytest
from conftest import pool_payload
from fastapi.testclient import TestClient

from parlaytiers.api.server import app, get_repository
from parlaytiers.db.repository import ParlayRepository

HEADERS = {"X-API-Key": "test-key"}


@pytest.fixture
def client(monkeypatch, session_factory):
    monkeypatch.setenv("PARLAYTIERS_API_KEY", "test-key")
    app.dependency_overrides[get_repository] = lambda: ParlayRepository(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_generate_requires_api_key(client, pool_file) -> None:
    response = client.post("/generate", json={"pool_path": str(pool_file())})
    assert response.status_code == 401


def test_generate_then_list(client, pool_file) -> None:
    response = client.post("/generate", json={"pool_path": str(pool_file())}, headers=HEADERS)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["parlays_generated"] > 0

    listed = client.get("/parlays", params={"tier": "exploration", "limit": 200}, headers=HEADERS)
    assert listed.status_code == 200
    rows = listed.json()
    assert len(rows) == body["tiers"]["exploration"]["count"]
    assert all(row["tier"] == "exploration" for row in rows)


def test_unknown_tier_is_rejected(client, pool_file) -> None:
    response = client.post(
        "/generate",
        json={"pool_path": str(pool_file()), "tiers": ["jackpot"]},
        headers=HEADERS,
    )
    assert response.status_code == 422


def test_thin_pool_returns_422(client, pool_file) -> None:
    response = client.post(
        "/generate", json={"pool_path": str(pool_file(pool_payload(5)))}, headers=HEADERS
    )
    assert response.status_code == 422
    assert response.json()["detail"]["pool_size"] == 5


def test_missing_pool_file_returns_404(client, tmp_path) -> None:
    response = client.post(
        "/generate", json={"pool_path": str(tmp_path / "missing.json")}, headers=HEADERS
    )
    assert response.status_code == 404
