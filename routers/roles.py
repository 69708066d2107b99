# routers/roles.py

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from core.errors import InvalidArgument, handle_supabase_error, programmer_error
from core.logging_config import logger
from core.permission_helpers import requires_any_permission, requires_permission
from core.permission_pairing import group_permissions, toggle_permission, paired_permissions
from core.permissions import SUPER_ADMIN_ROLE
from core.role_store import ROLES_TABLE, invalidate_role_cache, known_permissions
from core.supabase_client import get_supabase_client
from dependencies.auth import CurrentUser
from models.permission import (
    PermissionToggleRequest,
    PermissionToggleResponse,
    RoleCreate,
    RoleRead,
    RoleUpdate,
)


router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
)


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def get_client():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def to_role_read(row: dict) -> RoleRead:
    permissions = list(row.get("permissions") or [])
    return RoleRead(
        id=str(row["id"]),
        name=row["name"],
        permissions=permissions,
        grouped=group_permissions(permissions),
    )


def clean_role_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise HTTPException(422, "Role name is required")
    return name


def validate_permissions(permissions: List[str]) -> List[str]:
    """Reject names outside the catalogue; drop duplicates keeping order."""
    known = set(known_permissions())
    unknown = [p for p in permissions if p not in known]
    if unknown:
        raise HTTPException(422, f"Unknown permissions: {unknown}")

    unique = []
    for p in permissions:
        if p not in unique:
            unique.append(p)
    return unique


def fetch_role(client, role_id: str) -> dict:
    try:
        result = client.table(ROLES_TABLE).select("*").eq("id", role_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch role")

    if not result.data:
        raise HTTPException(404, f"Role {role_id} not found")
    return result.data[0]


def ensure_name_available(client, name: str, role_id: str = None):
    try:
        result = client.table(ROLES_TABLE).select("id").eq("name", name).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to check role name")

    for row in result.data or []:
        if str(row.get("id")) != str(role_id):
            raise HTTPException(400, f"Role '{name}' already exists")


# ============================================================
# TOGGLE PERMISSION (checklist pairing)
# ============================================================
@router.post(
    "/permissions/toggle",
    response_model=PermissionToggleResponse,
    summary="Check or uncheck a permission with its paired actions",
)
def toggle_role_permission(
    payload: PermissionToggleRequest,
    current_user: CurrentUser = Depends(requires_any_permission(["roles.create", "roles.edit"])),
):
    try:
        selected = toggle_permission(payload.selected, payload.permission, payload.checked)
        toggled = paired_permissions(payload.permission)
    except InvalidArgument as e:
        raise programmer_error(e)

    return PermissionToggleResponse(selected=selected, toggled=toggled)


# ============================================================
# LIST ROLES
# ============================================================
@router.get("", response_model=List[RoleRead], summary="List roles")
def list_roles(current_user: CurrentUser = Depends(requires_permission("roles.index"))):
    client = get_client()

    try:
        result = client.table(ROLES_TABLE).select("*").order("name").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to list roles")

    return [to_role_read(row) for row in result.data or []]


# ============================================================
# GET ROLE
# ============================================================
@router.get("/{role_id}", response_model=RoleRead, summary="Get role")
def get_role(role_id: str, current_user: CurrentUser = Depends(requires_permission("roles.show"))):
    return to_role_read(fetch_role(get_client(), role_id))


# ============================================================
# CREATE ROLE
# ============================================================
@router.post("", response_model=RoleRead, summary="Create role")
def create_role(payload: RoleCreate, current_user: CurrentUser = Depends(requires_permission("roles.store"))):
    client = get_client()
    name = clean_role_name(payload.name)
    permissions = validate_permissions(payload.permissions)

    ensure_name_available(client, name)

    try:
        result = client.table(ROLES_TABLE).insert({
            "name": name,
            "permissions": permissions,
        }).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create role")

    if not result.data:
        raise HTTPException(500, "Role insert returned no data")

    invalidate_role_cache()
    logger.info(f"Role '{name}' created by {current_user.email} with {len(permissions)} permissions")
    return to_role_read(result.data[0])


# ============================================================
# UPDATE ROLE
# ============================================================
@router.put("/{role_id}", response_model=RoleRead, summary="Update role")
def update_role(
    role_id: str,
    payload: RoleUpdate,
    current_user: CurrentUser = Depends(requires_permission("roles.update")),
):
    client = get_client()
    existing = fetch_role(client, role_id)

    updates = {}
    if payload.name is not None:
        name = clean_role_name(payload.name)
        if name != existing["name"]:
            ensure_name_available(client, name, role_id)
        updates["name"] = name

    # Omitted permissions leave the role's set alone; [] clears it
    if payload.permissions is not None:
        updates["permissions"] = validate_permissions(payload.permissions)

    if not updates:
        return to_role_read(existing)

    try:
        result = client.table(ROLES_TABLE).update(updates).eq("id", role_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update role")

    if not result.data:
        raise HTTPException(404, f"Role {role_id} not found")

    invalidate_role_cache()
    logger.info(f"Role {role_id} updated by {current_user.email}: {sorted(updates)}")
    return to_role_read(result.data[0])


# ============================================================
# DELETE ROLE
# ============================================================
@router.delete("/{role_id}", summary="Delete role")
def delete_role(role_id: str, current_user: CurrentUser = Depends(requires_permission("roles.destroy"))):
    client = get_client()
    existing = fetch_role(client, role_id)

    if existing["name"] == SUPER_ADMIN_ROLE:
        raise HTTPException(400, f"Cannot delete {SUPER_ADMIN_ROLE} role")

    try:
        client.table(ROLES_TABLE).delete().eq("id", role_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete role")

    invalidate_role_cache()
    logger.info(f"Role '{existing['name']}' deleted by {current_user.email}")
    return {"success": True, "deleted_id": role_id}
