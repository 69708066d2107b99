from typing import Optional, List
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.config import settings
from core.role_store import effective_permissions
from core.supabase_client import get_supabase_client


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None

    # Role names as assigned in user_metadata
    roles: List[str] = []

    # Effective permission names for this session (already resolved
    # from roles + per-user overrides; evaluated by exact match)
    permissions: List[str] = []


def _metadata_roles(metadata: dict) -> List[str]:
    """Accepts metadata["roles"] (list) or legacy metadata["role"] (str)."""
    raw = metadata.get("roles")
    if raw is None:
        raw = metadata.get("role")
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raw = []

    roles = [r for r in raw if isinstance(r, str) and r]
    return roles or [settings.DEFAULT_ROLE]


# ============================================================
# AUTH DECODING (Supabase: validates JWT + fetches metadata)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:
    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception:
        raise unauthorized

    if not auth_resp or not auth_resp.user or not auth_resp.user.email:
        raise unauthorized

    auth_user = auth_resp.user
    metadata = auth_user.user_metadata or {}
    roles = _metadata_roles(metadata)

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        name=metadata.get("name") or metadata.get("full_name"),
        roles=roles,
        permissions=effective_permissions(roles, metadata.get("permissions")),
    )
