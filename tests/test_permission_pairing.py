# tests/test_permission_pairing.py

"""
Tests for the role editor's paired permission checklist.
"""

import pytest

from core.errors import InvalidArgument
from core.permission_pairing import (
    action_label,
    group_permissions,
    paired_permissions,
    split_permission,
    toggle_permission,
    visible_actions,
)


def test_split_permission_uses_last_dot():
    assert split_permission("notice-and-evictions.edit") == ("notice-and-evictions", "edit")


@pytest.mark.parametrize("bad", ["tenants", ".edit", "tenants.", 5])
def test_split_permission_rejects_malformed(bad):
    with pytest.raises(InvalidArgument):
        split_permission(bad)


@pytest.mark.parametrize("name, expected", [
    ("tenants.create", ["tenants.create", "tenants.store"]),
    ("tenants.store", ["tenants.store", "tenants.create"]),
    ("tenants.edit", ["tenants.edit", "tenants.update"]),
    ("tenants.update", ["tenants.update", "tenants.edit"]),
    ("tenants.index", ["tenants.index"]),
    ("tenants.destroy", ["tenants.destroy"]),
])
def test_paired_permissions(name, expected):
    assert paired_permissions(name) == expected


def test_checking_create_adds_store():
    selected = toggle_permission(["units.index"], "units.create", True)
    assert selected == ["units.index", "units.create", "units.store"]


def test_checking_is_idempotent():
    selected = toggle_permission(["units.create", "units.store"], "units.create", True)
    assert selected == ["units.create", "units.store"]


def test_unchecking_edit_removes_update():
    selected = toggle_permission(["units.edit", "units.index", "units.update"], "units.edit", False)
    assert selected == ["units.index"]


def test_toggle_drops_duplicates_from_input():
    assert toggle_permission(["a.index", "a.index"], "a.show", True) == ["a.index", "a.show"]


def test_group_permissions_keeps_first_seen_order():
    groups = group_permissions(["units.index", "tenants.index", "units.edit"])
    assert list(groups) == ["units", "tenants"]
    assert groups["units"] == ["units.index", "units.edit"]


def test_visible_actions_hide_save_half():
    names = ["cities.index", "cities.store", "roles.edit", "roles.update"]
    assert visible_actions(names) == ["cities.index", "roles.edit"]


def test_action_labels():
    assert action_label("index") == "View List"
    assert action_label("destroy") == "Delete"
    assert action_label("export") == "export"
