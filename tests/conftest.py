# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from core.permissions import ROLE_PERMISSIONS, SUPER_ADMIN_ROLE
from dependencies.auth import CurrentUser, get_current_user


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_admin_user():
    """A Super-Admin with the full permission catalogue."""
    return CurrentUser(
        id="admin-user-id",
        email="admin@example.com",
        name="Admin",
        roles=[SUPER_ADMIN_ROLE],
        permissions=sorted(ROLE_PERMISSIONS[SUPER_ADMIN_ROLE]),
    )


@pytest.fixture
def mock_viewer_user():
    """A viewer: index/show pages only."""
    return CurrentUser(
        id="viewer-user-id",
        email="viewer@example.com",
        roles=["viewer"],
        permissions=sorted(ROLE_PERMISSIONS["viewer"]),
    )


@pytest.fixture
def login_as(app):
    """
    Override get_current_user for the duration of a test.

    Usage:
        login_as(mock_admin_user)
    """
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    yield _login
    app.dependency_overrides = {}


@pytest.fixture
def mock_supabase_client():
    """
    Supabase client whose query builder chains back to itself.
    Set `.execute.return_value` on `client.query` to control results.
    """
    mock_client = Mock()
    mock_query = Mock()
    for method in ("select", "eq", "order", "limit", "insert", "update", "delete", "in_"):
        getattr(mock_query, method).return_value = mock_query
    mock_client.table.return_value = mock_query
    mock_client.query = mock_query
    return mock_client


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
