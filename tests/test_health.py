"""Tests for the health endpoint and its cache."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from src.studio.core.health import reset_health_cache
from tests.helpers import db_error


@pytest.fixture(autouse=True)
def clear_health_cache():
    """Reset health cache before each test."""
    reset_health_cache()
    yield
    reset_health_cache()


@asynccontextmanager
async def _healthy_session():
    yield AsyncMock()


@asynccontextmanager
async def _broken_session():
    raise db_error("could not connect to server")
    yield  # pragma: no cover


async def test_health_reports_healthy_database(client: AsyncClient):
    with patch("src.studio.core.health.get_session", _healthy_session):
        response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["cached"] is False


async def test_health_reports_unhealthy_database_and_caches(client: AsyncClient):
    with patch("src.studio.core.health.get_session", _broken_session):
        response1 = await client.get("/health")
        response2 = await client.get("/health")

    assert response1.status_code == 503
    assert response1.json()["database"].startswith("unhealthy")
    assert response2.status_code == 503
    assert response2.json()["cached"] is True


async def test_metrics_endpoint_is_exposed(client: AsyncClient):
    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests" in response.text
