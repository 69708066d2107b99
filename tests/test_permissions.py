# tests/test_permissions.py

"""
Tests for the permission check and catalogue endpoints.
"""

from fastapi.testclient import TestClient
from unittest.mock import patch

from dependencies.auth import CurrentUser


def tenant_editor():
    return CurrentUser(
        id="u1",
        email="editor@example.com",
        roles=["leasing"],
        permissions=["tenants.edit", "tenants.index"],
    )


def check(client, mode, names):
    return client.post("/permissions/check", json={"mode": mode, "names": names})


def test_check_single(client: TestClient, login_as):
    login_as(tenant_editor())
    response = check(client, "single", ["tenants.edit"])
    assert response.status_code == 200
    assert response.json()["granted"] is True


def test_check_all_and_any(client: TestClient, login_as):
    login_as(tenant_editor())
    assert check(client, "all", ["tenants.edit", "tenants.update"]).json()["granted"] is False
    assert check(client, "any", ["tenants.update", "tenants.index"]).json()["granted"] is True


def test_check_empty_lists(client: TestClient, login_as):
    login_as(CurrentUser(id="u2", email="nobody@example.com"))
    assert check(client, "any", []).json()["granted"] is False
    assert check(client, "all", []).json()["granted"] is True


def test_check_single_with_two_names_is_rejected(client: TestClient, login_as):
    login_as(tenant_editor())
    response = check(client, "single", ["tenants.edit", "tenants.index"])
    assert response.status_code == 422


def test_check_non_string_name_is_rejected(client: TestClient, login_as):
    login_as(tenant_editor())
    response = check(client, "any", [{"name": "tenants.edit"}])
    assert response.status_code == 422


def test_catalog_hides_paired_actions(client: TestClient, login_as, mock_viewer_user):
    login_as(mock_viewer_user)
    with patch("core.role_store.get_supabase_client", return_value=None):
        response = client.get("/permissions/catalog")

    assert response.status_code == 200
    groups = {g["resource"]: g["actions"] for g in response.json()}

    tenant_actions = [a["action"] for a in groups["tenants"]]
    assert tenant_actions == ["index", "create", "show", "edit", "destroy"]
    assert [a["action"] for a in groups["cities"]] == ["index", "destroy"]
    assert groups["tenants"][0]["label"] == "View List"
