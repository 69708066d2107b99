# models/permission.py

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from models.enums import PermissionMode


# -------------------------------------------------
# Permission checks
# -------------------------------------------------
class PermissionQuery(BaseModel):
    mode: PermissionMode = PermissionMode.single
    names: List[str] = Field(default_factory=list)


class PermissionCheckResult(BaseModel):
    mode: PermissionMode
    names: List[str]
    granted: bool


# -------------------------------------------------
# Permission catalogue (role editor checklist)
# -------------------------------------------------
class PermissionAction(BaseModel):
    name: str
    action: str
    label: str


class PermissionGroup(BaseModel):
    resource: str
    actions: List[PermissionAction]


class PermissionToggleRequest(BaseModel):
    selected: List[str] = Field(default_factory=list)
    permission: str
    checked: bool


class PermissionToggleResponse(BaseModel):
    selected: List[str]
    toggled: List[str]


# -------------------------------------------------
# Roles
# -------------------------------------------------
class RoleCreate(BaseModel):
    name: str
    permissions: List[str] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    name: Optional[str] = None
    permissions: Optional[List[str]] = None


class RoleRead(BaseModel):
    id: str
    name: str
    permissions: List[str] = []
    grouped: Dict[str, List[str]] = {}
