# tests/test_auth.py

"""
Tests for bearer-token authentication and /auth/me.
"""

from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from core.permissions import ROLE_PERMISSIONS


def supabase_user(metadata, email="pm@example.com"):
    mock_client = Mock()
    mock_client.auth.get_user.return_value = Mock(
        user=Mock(id="user-1", email=email, user_metadata=metadata)
    )
    return mock_client


def test_me_returns_effective_permissions(client: TestClient):
    mock_client = supabase_user({"roles": ["viewer"], "permissions": ["tenants.edit"], "name": "Pat"})
    with patch("dependencies.auth.get_supabase_client", return_value=mock_client), \
            patch("core.role_store.get_supabase_client", return_value=None):
        response = client.get("/auth/me", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["name"] == "Pat"
    assert data["roles"] == ["viewer"]
    assert data["permissions"] == sorted(set(ROLE_PERMISSIONS["viewer"]) | {"tenants.edit"})


def test_legacy_single_role_and_default_role(client: TestClient):
    with patch("core.role_store.get_supabase_client", return_value=None):
        with patch("dependencies.auth.get_supabase_client", return_value=supabase_user({"role": "manager"})):
            response = client.get("/auth/me", headers={"Authorization": "Bearer t"})
        assert response.json()["roles"] == ["manager"]

        with patch("dependencies.auth.get_supabase_client", return_value=supabase_user({})):
            response = client.get("/auth/me", headers={"Authorization": "Bearer t"})
        assert response.json()["roles"] == ["viewer"]


def test_invalid_token(client: TestClient):
    mock_client = Mock()
    mock_client.auth.get_user.side_effect = Exception("invalid JWT")
    with patch("dependencies.auth.get_supabase_client", return_value=mock_client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer bad"})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_missing_token(client: TestClient):
    response = client.get("/auth/me")
    assert response.status_code in (401, 403)


def test_unknown_role_gets_no_permissions(client: TestClient):
    with patch("core.role_store.get_supabase_client", return_value=None), \
            patch("dependencies.auth.get_supabase_client", return_value=supabase_user({"roles": ["janitor"]})):
        response = client.get("/auth/me", headers={"Authorization": "Bearer t"})

    assert response.status_code == 200
    assert response.json()["roles"] == ["janitor"]
    assert response.json()["permissions"] == []
