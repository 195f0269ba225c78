"""Tests for the liveness and readiness probes."""

from unittest.mock import AsyncMock, patch

from tacotuesday import __version__


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


def test_ready(client):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"db": "ok"}


def test_not_ready_when_database_is_down(client):
    with patch(
        "tacotuesday.routers.health.check_db_connectivity",
        AsyncMock(return_value=False),
    ):
        response = client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {"db": "error"}
