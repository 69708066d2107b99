# core/role_store.py

from typing import Dict, Iterable, List

from core.cache import cached, cache_invalidate_prefix
from core.config import settings
from core.errors import handle_supabase_error
from core.logging_config import logger
from core.permissions import ALL_PERMISSIONS, ROLE_PERMISSIONS, get_role_permissions
from core.supabase_client import get_supabase_client


ROLES_TABLE = "roles"
ROLES_CACHE_PREFIX = "roles"


# -----------------------------------------------------
# Stored roles (Supabase "roles" table: id, name, permissions[])
# -----------------------------------------------------
@cached(ROLES_CACHE_PREFIX, ttl_seconds=lambda: settings.LOOKUP_CACHE_TTL_SECONDS)
def fetch_stored_role_permissions() -> Dict[str, List[str]]:
    """
    name → permissions for every role saved through the role editor.
    Returns {} when Supabase isn't configured so built-in roles still work.
    """
    client = get_supabase_client()
    if not client:
        return {}

    try:
        result = client.table(ROLES_TABLE).select("name, permissions").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to load roles")

    return {
        row["name"]: list(row.get("permissions") or [])
        for row in (result.data or [])
    }


def invalidate_role_cache():
    cache_invalidate_prefix(ROLES_CACHE_PREFIX)


# -----------------------------------------------------
# Effective permissions:
#   • permissions of every role the user holds
#     (stored role wins over the built-in of the same name)
#   • per-user overrides from user_metadata["permissions"]
# -----------------------------------------------------
def load_role_permissions(role_names: Iterable[str]) -> set:
    stored = fetch_stored_role_permissions()
    granted = set()
    for role in role_names:
        if role in stored:
            granted.update(stored[role])
        elif role in ROLE_PERMISSIONS:
            granted.update(get_role_permissions(role))
        else:
            logger.warning(f"Unknown role '{role}' has no permissions")
    return granted


def effective_permissions(role_names: Iterable[str], overrides=None) -> List[str]:
    granted = load_role_permissions(role_names)

    if isinstance(overrides, list):
        granted.update(p for p in overrides if isinstance(p, str) and p)

    return sorted(granted)


def known_permissions() -> List[str]:
    """Built-in catalogue plus anything stored roles reference, catalogue order first."""
    extra = set()
    for permissions in fetch_stored_role_permissions().values():
        extra.update(p for p in permissions if p not in ALL_PERMISSIONS)
    return list(ALL_PERMISSIONS) + sorted(extra)
