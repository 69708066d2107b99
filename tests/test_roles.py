# tests/test_roles.py

"""
Tests for role administration endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from core.permissions import ROLE_PERMISSIONS
from dependencies.auth import CurrentUser


@pytest.fixture(autouse=True)
def no_stored_roles():
    """Validate permissions against the built-in catalogue only."""
    with patch("core.role_store.get_supabase_client", return_value=None):
        yield


def test_list_roles(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    mock_supabase_client.query.execute.return_value = Mock(data=[
        {"id": 1, "name": "leasing", "permissions": ["tenants.index", "units.index"]},
    ])
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.get("/roles")

    assert response.status_code == 200
    role = response.json()[0]
    assert role["id"] == "1"
    assert role["grouped"] == {"tenants": ["tenants.index"], "units": ["units.index"]}


def test_list_roles_requires_permission(client: TestClient, login_as):
    login_as(CurrentUser(
        id="manager-id",
        email="manager@example.com",
        roles=["manager"],
        permissions=sorted(ROLE_PERMISSIONS["manager"]),
    ))
    response = client.get("/roles")
    assert response.status_code == 403


def test_create_role_forbidden_for_viewer(client: TestClient, login_as, mock_viewer_user):
    login_as(mock_viewer_user)
    response = client.post("/roles", json={"name": "x", "permissions": []})
    assert response.status_code == 403


def test_create_role(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    query = mock_supabase_client.query
    query.execute.side_effect = [
        Mock(data=[]),  # name check
        Mock(data=[{"id": 5, "name": "leasing", "permissions": ["tenants.create", "tenants.store"]}]),
    ]
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.post(
            "/roles",
            json={"name": "  leasing ", "permissions": ["tenants.create", "tenants.store", "tenants.create"]},
        )

    assert response.status_code == 200
    query.insert.assert_called_once_with({
        "name": "leasing",
        "permissions": ["tenants.create", "tenants.store"],
    })


def test_create_role_duplicate_name(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    mock_supabase_client.query.execute.return_value = Mock(data=[{"id": 2}])
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.post("/roles", json={"name": "leasing"})

    assert response.status_code == 400


def test_create_role_unknown_permission(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.post("/roles", json={"name": "leasing", "permissions": ["tenants.fly"]})

    assert response.status_code == 422
    assert "tenants.fly" in response.json()["detail"]


def test_update_role_missing(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    mock_supabase_client.query.execute.return_value = Mock(data=[])
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.put("/roles/99", json={"permissions": []})

    assert response.status_code == 404


def test_update_role_clears_permissions(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    query = mock_supabase_client.query
    query.execute.side_effect = [
        Mock(data=[{"id": 3, "name": "leasing", "permissions": ["tenants.index"]}]),
        Mock(data=[{"id": 3, "name": "leasing", "permissions": []}]),
    ]
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.put("/roles/3", json={"permissions": []})

    assert response.status_code == 200
    query.update.assert_called_once_with({"permissions": []})
    assert response.json()["permissions"] == []


def test_delete_super_admin_is_refused(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    mock_supabase_client.query.execute.return_value = Mock(data=[{"id": 1, "name": "Super-Admin"}])
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.delete("/roles/1")

    assert response.status_code == 400
    mock_supabase_client.query.delete.assert_not_called()


def test_delete_role(client: TestClient, login_as, mock_admin_user, mock_supabase_client):
    login_as(mock_admin_user)
    mock_supabase_client.query.execute.return_value = Mock(data=[{"id": 4, "name": "leasing"}])
    with patch("routers.roles.get_supabase_client", return_value=mock_supabase_client):
        response = client.delete("/roles/4")

    assert response.status_code == 200
    assert response.json() == {"success": True, "deleted_id": "4"}


def test_toggle_permission_pairs_actions(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    response = client.post(
        "/roles/permissions/toggle",
        json={"selected": ["units.index"], "permission": "units.edit", "checked": True},
    )

    assert response.status_code == 200
    assert response.json() == {
        "selected": ["units.index", "units.edit", "units.update"],
        "toggled": ["units.edit", "units.update"],
    }


def test_toggle_malformed_permission(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)
    response = client.post(
        "/roles/permissions/toggle",
        json={"selected": [], "permission": "units", "checked": True},
    )
    assert response.status_code == 422
