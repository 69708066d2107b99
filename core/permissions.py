# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
#
# Permission names are "<resource>.<action>", one per controller action.
# Matching is exact string equality: there is no "*" master key, so
# Super-Admin is granted every name explicitly.

SUPER_ADMIN_ROLE = "Super-Admin"

# Full controller action set, in checklist order
RESOURCE_ACTIONS = ["index", "create", "store", "show", "edit", "update", "destroy"]

RESOURCES = {
    "users": RESOURCE_ACTIONS,
    "roles": RESOURCE_ACTIONS,
    "properties": RESOURCE_ACTIONS,
    "units": RESOURCE_ACTIONS,
    "payments": RESOURCE_ACTIONS,
    "vendor-task-tracker": RESOURCE_ACTIONS,
    "move-in": RESOURCE_ACTIONS,
    "move-out": RESOURCE_ACTIONS,
    "offers-and-renewals": RESOURCE_ACTIONS,
    "notices": RESOURCE_ACTIONS,
    "notice-and-evictions": RESOURCE_ACTIONS,
    "applications": RESOURCE_ACTIONS,
    "vendors": RESOURCE_ACTIONS,
    "tenants": RESOURCE_ACTIONS,
    "payment-plans": RESOURCE_ACTIONS,

    # Cities are managed inline (no form pages)
    "cities": ["index", "store", "destroy"],
}


ALL_PERMISSIONS = [
    f"{resource}.{action}"
    for resource, actions in RESOURCES.items()
    for action in actions
]


ROLE_PERMISSIONS = {

    # =====================================================
    # SUPER ADMIN: every permission, cannot be deleted
    # =====================================================
    SUPER_ADMIN_ROLE: list(ALL_PERMISSIONS),

    # =====================================================
    # MANAGER: everything except role management
    # =====================================================
    "manager": [
        p for p in ALL_PERMISSIONS
        if not p.startswith("roles.")
    ],

    # =====================================================
    # VIEWER: list and detail pages only
    # =====================================================
    "viewer": [
        p for p in ALL_PERMISSIONS
        if p.endswith(".index") or p.endswith(".show")
    ],

    # =====================================================
    # FALLBACK
    # =====================================================
    "guest": [],
}


def get_role_permissions(role: str) -> list:
    """Return the built-in permission list for a role, or [] if unknown."""
    return list(ROLE_PERMISSIONS.get(role, []))
