# core/permission_helpers.py

"""
Permission evaluation for the current session.

The server hands every page a flat list of permission names that it has
already filtered for the user. Everything here is a set-membership test
against that list:

    • has(permissions, "tenants.edit")
    • has_any(permissions, ["tenants.update", "tenants.index"])
    • has_all(permissions, ["tenants.edit", "tenants.update"])

Matching is exact and case-sensitive. An empty requirement list is
satisfied by has_all() but never by has_any(), so "require nothing"
affordances are visible by default while "require one of nothing" ones
stay hidden.
"""

from typing import Iterable, List, Optional, Union

from fastapi import Depends, HTTPException

from core.errors import InvalidArgument
from dependencies.auth import CurrentUser, get_current_user
from models.enums import PermissionMode


Names = Union[str, Iterable[str]]


# -----------------------------------------------------
# Argument validation
# -----------------------------------------------------
def _require_name(name) -> str:
    if not isinstance(name, str):
        raise InvalidArgument(
            f"Permission name must be a string, got {type(name).__name__}"
        )
    return name


def _require_names(names: Names) -> List[str]:
    """Accept a single name or an iterable of names; reject anything else."""
    if isinstance(names, str):
        return [names]
    if names is None or isinstance(names, (bytes, dict)):
        raise InvalidArgument("Permission names must be a string or a list of strings")
    try:
        items = list(names)
    except TypeError:
        raise InvalidArgument(
            f"Permission names must be a string or a list of strings, got {type(names).__name__}"
        )
    return [_require_name(n) for n in items]


# =====================================================
# PermissionSet: immutable, one per session
# =====================================================
class PermissionSet:
    """Frozen collection of granted permission names."""

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = ()):
        self._names = frozenset(_require_names(names))

    def __contains__(self, name) -> bool:
        return name in self._names

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other) -> bool:
        if isinstance(other, PermissionSet):
            return self._names == other._names
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f"PermissionSet({sorted(self._names)!r})"

    def to_list(self) -> List[str]:
        """Sorted list, for JSON responses."""
        return sorted(self._names)


def _as_permission_set(permissions) -> PermissionSet:
    if isinstance(permissions, PermissionSet):
        return permissions
    return PermissionSet(permissions)


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has(permissions, name: str) -> bool:
    """True iff `name` is an exact member of `permissions`. "" is never granted."""
    name = _require_name(name)
    if name == "":
        return False
    return name in _as_permission_set(permissions)


def has_any(permissions, names: Names) -> bool:
    """True iff at least one of `names` is granted. An empty list grants nothing."""
    names = _require_names(names)
    granted = _as_permission_set(permissions)
    return any(has(granted, n) for n in names)


def has_all(permissions, names: Names) -> bool:
    """True iff every one of `names` is granted. An empty list is always satisfied."""
    names = _require_names(names)
    granted = _as_permission_set(permissions)
    return all(has(granted, n) for n in names)


# =====================================================
# PermissionEvaluator: bound to one session
# =====================================================
class PermissionEvaluator:
    """
    Evaluator bound to a single PermissionSet (and the user's role names).

    Passed explicitly into whatever needs it; nothing reads permissions
    from global state.
    """

    def __init__(self, permissions, roles: Optional[Iterable[str]] = None):
        self.permissions = _as_permission_set(permissions)
        self.roles = PermissionSet(roles or [])

    def has(self, name: str) -> bool:
        return has(self.permissions, name)

    def has_any(self, names: Names) -> bool:
        return has_any(self.permissions, names)

    def has_all(self, names: Names) -> bool:
        return has_all(self.permissions, names)

    # Role checks share the exact-match semantics
    def has_role(self, role: str) -> bool:
        return has(self.roles, role)

    def has_any_role(self, roles: Names) -> bool:
        return has_any(self.roles, roles)

    def has_all_roles(self, roles: Names) -> bool:
        return has_all(self.roles, roles)

    def evaluate(self, query) -> bool:
        """
        Evaluate a PermissionQuery (anything with `.mode` and `.names`).
        `single` requires exactly one name.
        """
        mode = PermissionMode(query.mode)
        names = _require_names(query.names)

        if mode == PermissionMode.single:
            if len(names) != 1:
                raise InvalidArgument(
                    f"A single-permission query needs exactly one name, got {len(names)}"
                )
            return self.has(names[0])
        if mode == PermissionMode.any:
            return self.has_any(names)
        return self.has_all(names)


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def get_permission_evaluator(
    current_user: CurrentUser = Depends(get_current_user),
) -> PermissionEvaluator:
    return PermissionEvaluator(current_user.permissions, current_user.roles)


def requires_permission(permission: str):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_permission("roles.index"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has(current_user.permissions, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required"
            )
        return current_user

    return dependency


def requires_any_permission(permissions: List[str]):
    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_any(current_user.permissions, permissions):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: one of {permissions} required"
            )
        return current_user

    return dependency


def requires_all_permissions(permissions: List[str]):
    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_all(current_user.permissions, permissions):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: all of {permissions} required"
            )
        return current_user

    return dependency
