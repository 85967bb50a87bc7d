"""Tests for role gates and the action table"""

import pytest

from guardpost.domain.enums import PermissionName, UserRole
from guardpost.domain.policies import (
    ACTION_RULES,
    DEFAULT_LOCATIONS,
    DEFAULT_PERMISSION_GRANTS,
    Action,
    RoleGate,
    is_privileged,
    passes_gate,
)


class TestRoleGates:
    @pytest.mark.parametrize(
        "role,gate,expected",
        [
            (UserRole.SUPER_ADMIN, RoleGate.ADMIN, True),
            (UserRole.ADMIN, RoleGate.ADMIN, True),
            (UserRole.SUPERVISOR, RoleGate.ADMIN, False),
            (UserRole.SUPERVISOR, RoleGate.SUPERVISOR, True),
            (UserRole.GUARD, RoleGate.SUPERVISOR, False),
            (UserRole.ADMIN, RoleGate.SUPER_ADMIN, False),
            (UserRole.SUPER_ADMIN, RoleGate.SUPER_ADMIN, True),
            (UserRole.GUARD, None, True),
        ],
    )
    def test_passes_gate(self, role, gate, expected):
        assert passes_gate(role, gate) is expected

    def test_privileged_roles(self):
        assert is_privileged(UserRole.SUPERVISOR)
        assert is_privileged(UserRole.ADMIN)
        assert not is_privileged(UserRole.GUARD)
        assert not is_privileged(UserRole.HR_MANAGER)


def test_every_action_has_a_rule():
    assert set(ACTION_RULES) == set(Action)


def test_toggle_permission_requires_admin_gate_and_grant():
    rule = ACTION_RULES[Action.TOGGLE_PERMISSION]
    assert rule.gate is RoleGate.ADMIN
    assert rule.permission is PermissionName.MANAGE_PERMISSIONS


def test_default_grants():
    """
    GIVEN the defaults seeded for new companies
    THEN admins hold every permission and guards hold operational ones only
    """
    assert set(DEFAULT_PERMISSION_GRANTS[UserRole.ADMIN]) == set(PermissionName)
    assert set(DEFAULT_PERMISSION_GRANTS[UserRole.SUPERVISOR]) == {
        PermissionName.VIEW_REPORTS,
        PermissionName.MANAGE_VISITORS,
        PermissionName.MANAGE_PATROLS,
        PermissionName.MOBILE_LOGIN,
    }
    assert set(DEFAULT_PERMISSION_GRANTS[UserRole.GUARD]) == {
        PermissionName.MANAGE_VISITORS,
        PermissionName.MANAGE_PATROLS,
        PermissionName.MOBILE_LOGIN,
    }
    assert UserRole.SUPER_ADMIN not in DEFAULT_PERMISSION_GRANTS


def test_default_location_codes_unique():
    codes = [code for code, _, _ in DEFAULT_LOCATIONS]
    assert len(codes) == len(set(codes)) == 10
