# tests/test_health.py

"""
Tests for health endpoints and startup config validation.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from core import config_validator
from core.config import settings


def test_health_app(client: TestClient):
    response = client.get("/health/app")
    assert response.json() == {"service": settings.PROJECT_NAME, "status": "ok"}


def test_health_db_not_configured(client: TestClient):
    with patch("core.supabase_client.get_supabase_client", return_value=None):
        response = client.get("/health/db")
    assert response.json()["status"] == "not_configured"


def test_health_db_degraded(client: TestClient, mock_supabase_client):
    mock_supabase_client.query.execute.side_effect = [
        Mock(data=[{"id": 1}]),
        Exception("boom"),
        Mock(data=[]),
        Mock(data=[]),
        Mock(data=[]),
    ]
    with patch("core.supabase_client.get_supabase_client", return_value=mock_supabase_client):
        response = client.get("/health/db")

    details = response.json()["details"]
    assert response.json()["status"] == "degraded"
    assert details["tables"]["roles"]["rows_found"] == 1
    assert details["tables"]["cities"]["status"] == "error"


def test_validate_config_missing_required(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_URL", None)
    with pytest.raises(RuntimeError):
        config_validator.validate_config_on_startup()


def test_validate_config_warns_on_unknown_default_role(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setattr(settings, "DEFAULT_ROLE", "janitor")

    warnings = config_validator.validate_optional_config()
    assert any("janitor" in w for w in warnings)
    config_validator.validate_config_on_startup()


def test_startup_tolerates_routes_without_path(app):
    class MountedRouter:
        pass

    app.router.routes.append(MountedRouter())
    with TestClient(app):
        pass
