# routers/permissions.py

from fastapi import APIRouter, Depends
from typing import List

from core.errors import InvalidArgument, programmer_error
from core.permission_helpers import PermissionEvaluator, get_permission_evaluator
from core.permission_pairing import (
    action_label,
    group_permissions,
    split_permission,
    visible_actions,
)
from core.role_store import known_permissions
from dependencies.auth import get_current_user
from models.permission import (
    PermissionAction,
    PermissionCheckResult,
    PermissionGroup,
    PermissionQuery,
)


router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
)


# ============================================================
# CHECK PERMISSIONS
# ============================================================
@router.post(
    "/check",
    response_model=PermissionCheckResult,
    summary="Evaluate a permission query for the current user",
    description="""
    Evaluate `names` against the caller's permission set.

    **Modes:**
    - `single`: exactly one name, granted iff present
    - `any`: granted iff at least one name is present (empty list → false)
    - `all`: granted iff every name is present (empty list → true)
    """,
)
def check_permissions(
    query: PermissionQuery,
    evaluator: PermissionEvaluator = Depends(get_permission_evaluator),
):
    try:
        granted = evaluator.evaluate(query)
    except InvalidArgument as e:
        raise programmer_error(e)

    return PermissionCheckResult(mode=query.mode, names=query.names, granted=granted)


# ============================================================
# PERMISSION CATALOGUE (role editor checklist)
# ============================================================
@router.get(
    "/catalog",
    response_model=List[PermissionGroup],
    summary="All permissions grouped by resource",
    dependencies=[Depends(get_current_user)],
)
def permission_catalog():
    """
    Returns one group per resource with only the checklist-visible
    actions; `store` / `update` are toggled through their pairs.
    """
    groups = []
    for resource, names in group_permissions(known_permissions()).items():
        actions = []
        for name in visible_actions(names):
            _, action = split_permission(name)
            actions.append(PermissionAction(name=name, action=action, label=action_label(action)))
        groups.append(PermissionGroup(resource=resource, actions=actions))
    return groups
