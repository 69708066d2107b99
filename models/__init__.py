# -------------------------
# Enums
# -------------------------
from .enums import (
    LevelState,
    PermissionMode,
    SelectionActionType,
)

# -------------------------
# Permission & Role Models
# -------------------------
from .permission import (
    PermissionQuery,
    PermissionCheckResult,
    PermissionAction,
    PermissionGroup,
    PermissionToggleRequest,
    PermissionToggleResponse,
    RoleCreate,
    RoleUpdate,
    RoleRead,
)

# -------------------------
# Cascading Selection Models
# -------------------------
from .selection import (
    SelectionLevel,
    SelectionState,
    SelectionAction,
    SelectionResolveRequest,
    SelectionResolveResponse,
    CascadeLookups,
)

__all__ = [
    # enums
    "LevelState",
    "PermissionMode",
    "SelectionActionType",

    # permissions & roles
    "PermissionQuery",
    "PermissionCheckResult",
    "PermissionAction",
    "PermissionGroup",
    "PermissionToggleRequest",
    "PermissionToggleResponse",
    "RoleCreate",
    "RoleUpdate",
    "RoleRead",

    # selections
    "SelectionLevel",
    "SelectionState",
    "SelectionAction",
    "SelectionResolveRequest",
    "SelectionResolveResponse",
    "CascadeLookups",
]
