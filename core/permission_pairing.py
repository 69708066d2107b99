# core/permission_pairing.py

"""
Role editor checklist helpers.

A form page and the action that saves it are separate permissions
("tenants.create" renders the form, "tenants.store" accepts the POST).
The checklist only shows the page half and toggles both together,
using the static PAIRED_ACTIONS table below.
"""

from typing import Dict, Iterable, List, Tuple

from core.errors import InvalidArgument


PAIRED_ACTIONS: Dict[str, List[str]] = {
    "create": ["store"],
    "store": ["create"],
    "edit": ["update"],
    "update": ["edit"],
}

# Save-half actions: hidden in the checklist, toggled through their pair
HIDDEN_ACTIONS = {"store", "update"}

ACTION_LABELS: Dict[str, str] = {
    "index": "View List",
    "show": "View Details",
    "create": "Create",
    "store": "Create",
    "edit": "Edit",
    "update": "Edit",
    "destroy": "Delete",
}


def split_permission(name: str) -> Tuple[str, str]:
    """'notice-and-evictions.edit' → ('notice-and-evictions', 'edit')"""
    if not isinstance(name, str):
        raise InvalidArgument(f"Permission name must be a string, got {type(name).__name__}")
    resource, sep, action = name.rpartition(".")
    if not sep or not resource or not action:
        raise InvalidArgument(f"Permission '{name}' is not of the form <resource>.<action>")
    return resource, action


def paired_permissions(name: str) -> List[str]:
    """The permission itself followed by its paired permissions."""
    resource, action = split_permission(name)
    return [name] + [f"{resource}.{paired}" for paired in PAIRED_ACTIONS.get(action, [])]


def toggle_permission(selected: Iterable[str], name: str, checked: bool) -> List[str]:
    """
    Check or uncheck `name` together with its pairs.
    Order of `selected` is kept; new names are appended once.
    """
    toggled = paired_permissions(name)
    current = []
    for permission in selected:
        if permission not in current:
            current.append(permission)

    if checked:
        return current + [p for p in toggled if p not in current]
    return [p for p in current if p not in toggled]


def group_permissions(names: Iterable[str]) -> Dict[str, List[str]]:
    """Group permission names by resource, in first-seen order."""
    groups: Dict[str, List[str]] = {}
    for name in names:
        resource, _ = split_permission(name)
        groups.setdefault(resource, []).append(name)
    return groups


def action_label(action: str) -> str:
    return ACTION_LABELS.get(action, action)


def visible_actions(names: Iterable[str]) -> List[str]:
    """Drop the save-half actions the checklist never shows."""
    return [n for n in names if split_permission(n)[1] not in HIDDEN_ACTIONS]
