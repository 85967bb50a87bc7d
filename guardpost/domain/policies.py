"""
Access policy tables.

Coarse role gates, the per-action requirements checked by the authorization
service, and the defaults seeded into every newly provisioned company.
"""

from dataclasses import dataclass
from enum import Enum

from guardpost.domain.enums import PermissionName, UserRole

SUPER_ADMIN_ROLES = frozenset({UserRole.SUPER_ADMIN})
ADMIN_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN})
SUPERVISOR_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.SUPERVISOR})

# Roles that see every row of their company instead of only their own.
PRIVILEGED_ROLES = SUPERVISOR_ROLES

# Roles that may always log in from a mobile device.
MOBILE_EXEMPT_ROLES = ADMIN_ROLES


class RoleGate(str, Enum):
    """Named role gates enforced before any fine-grained permission check"""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    SUPER_ADMIN = "super_admin"


GATE_ROLES: dict[RoleGate, frozenset[UserRole]] = {
    RoleGate.ADMIN: ADMIN_ROLES,
    RoleGate.SUPERVISOR: SUPERVISOR_ROLES,
    RoleGate.SUPER_ADMIN: SUPER_ADMIN_ROLES,
}

GATE_MESSAGES: dict[RoleGate, str] = {
    RoleGate.ADMIN: "Admin access required",
    RoleGate.SUPERVISOR: "Supervisor or admin access required",
    RoleGate.SUPER_ADMIN: "Super admin access required",
}


class Action(str, Enum):
    """Operations subject to an authorization decision"""

    VIEW_PERMISSIONS = "view_permissions"
    TOGGLE_PERMISSION = "toggle_permission"
    LIST_USERS = "list_users"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    LOG_PATROL = "log_patrol"
    UPDATE_PATROL = "update_patrol"
    RESOLVE_PATROL = "resolve_patrol"
    REGISTER_VISITOR = "register_visitor"
    CHECKOUT_VISITOR = "checkout_visitor"
    VIEW_REPORT_SUMMARY = "view_report_summary"
    MANAGE_LOCATIONS = "manage_locations"
    MANAGE_COMPANIES = "manage_companies"


@dataclass(frozen=True)
class ActionRule:
    """What an action requires: an optional role gate and an optional grant"""

    gate: RoleGate | None = None
    permission: PermissionName | None = None


ACTION_RULES: dict[Action, ActionRule] = {
    Action.VIEW_PERMISSIONS: ActionRule(),
    Action.TOGGLE_PERMISSION: ActionRule(RoleGate.ADMIN, PermissionName.MANAGE_PERMISSIONS),
    Action.LIST_USERS: ActionRule(RoleGate.SUPERVISOR),
    Action.CREATE_USER: ActionRule(RoleGate.ADMIN, PermissionName.MANAGE_USERS),
    Action.UPDATE_USER: ActionRule(RoleGate.ADMIN, PermissionName.MANAGE_USERS),
    Action.DELETE_USER: ActionRule(RoleGate.ADMIN, PermissionName.MANAGE_USERS),
    Action.LOG_PATROL: ActionRule(permission=PermissionName.MANAGE_PATROLS),
    Action.UPDATE_PATROL: ActionRule(permission=PermissionName.MANAGE_PATROLS),
    Action.RESOLVE_PATROL: ActionRule(RoleGate.SUPERVISOR, PermissionName.MANAGE_PATROLS),
    Action.REGISTER_VISITOR: ActionRule(permission=PermissionName.MANAGE_VISITORS),
    Action.CHECKOUT_VISITOR: ActionRule(permission=PermissionName.MANAGE_VISITORS),
    Action.VIEW_REPORT_SUMMARY: ActionRule(permission=PermissionName.VIEW_REPORTS),
    Action.MANAGE_LOCATIONS: ActionRule(RoleGate.ADMIN),
    Action.MANAGE_COMPANIES: ActionRule(RoleGate.SUPER_ADMIN),
}


def passes_gate(role: UserRole, gate: RoleGate | None) -> bool:
    """True when the role is admitted by the gate (or there is no gate)"""
    if gate is None:
        return True
    return role in GATE_ROLES[gate]


def is_privileged(role: UserRole) -> bool:
    """Privileged roles see and mutate every row of their company"""
    return role in PRIVILEGED_ROLES


# Upper bound for a new company's subscription period
MAX_COMPANY_EXPIRY_DAYS = 36500

# Grants written for every newly provisioned company
DEFAULT_PERMISSION_GRANTS: dict[UserRole, tuple[PermissionName, ...]] = {
    UserRole.ADMIN: (
        PermissionName.MANAGE_USERS,
        PermissionName.MANAGE_PERMISSIONS,
        PermissionName.VIEW_REPORTS,
        PermissionName.MANAGE_VISITORS,
        PermissionName.MANAGE_PATROLS,
        PermissionName.MOBILE_LOGIN,
    ),
    UserRole.SUPERVISOR: (
        PermissionName.VIEW_REPORTS,
        PermissionName.MANAGE_VISITORS,
        PermissionName.MANAGE_PATROLS,
        PermissionName.MOBILE_LOGIN,
    ),
    UserRole.GUARD: (
        PermissionName.MANAGE_VISITORS,
        PermissionName.MANAGE_PATROLS,
        PermissionName.MOBILE_LOGIN,
    ),
}

# (code, name, description) patrol checkpoints seeded for every new company
DEFAULT_LOCATIONS: list[tuple[str, str, str]] = [
    ("MAIN-GATE", "Main Gate", "Primary vehicle and pedestrian entrance"),
    ("PERIM-N", "North Perimeter", "Northern fence line"),
    ("PERIM-E", "East Perimeter", "Eastern fence line"),
    ("PERIM-W", "West Perimeter", "Western fence line"),
    ("PERIM-S", "South Perimeter", "Southern fence line"),
    ("WH-A", "Warehouse A", "Storage warehouse A"),
    ("WH-B", "Warehouse B", "Storage warehouse B"),
    ("DOCK", "Loading Dock", "Goods receiving and dispatch"),
    ("ADMIN-BLDG", "Admin Building", "Administration offices"),
    ("CHEM-STORE", "Chemical Storage", "Hazardous materials store"),
]
