"""
Test suite for health endpoints.

System role: Verification of liveness and database checks
"""

from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from knowledge_base.boundary.db.connection import get_async_db


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client, app):
    db = AsyncMock()
    app.dependency_overrides[get_async_db] = lambda: db

    response = client.get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    db.execute.assert_awaited_once()


def test_health_check_db_unreachable(client, app):
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    app.dependency_overrides[get_async_db] = lambda: db

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "message": "Database unreachable"}


def test_correlation_id_should_be_echoed(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
