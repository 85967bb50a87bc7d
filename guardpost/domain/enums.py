"""Domain enumerations for Guardpost."""

from enum import Enum


class CompanyStatus(str, Enum):
    """Company lifecycle status"""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    EXPIRED = "expired"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class UserRole(str, Enum):
    """
    Roles a user can hold within a company.

    SUPER_ADMIN is reserved for platform operators and is never granted
    through the regular user management endpoints.
    """

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    GUARD = "guard"
    OPERATIONS_MANAGER = "operations_manager"
    HR_MANAGER = "hr_manager"
    SAFETY_OFFICER = "safety_officer"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [role.value for role in cls]

    @classmethod
    def tenant_roles(cls) -> list["UserRole"]:
        """Roles that can be assigned inside a company"""
        return [role for role in cls if role is not cls.SUPER_ADMIN]


class PermissionName(str, Enum):
    """Fine-grained permissions granted per (company, role)"""

    MANAGE_USERS = "manage_users"
    MANAGE_PERMISSIONS = "manage_permissions"
    VIEW_REPORTS = "view_reports"
    MANAGE_VISITORS = "manage_visitors"
    MANAGE_PATROLS = "manage_patrols"
    MOBILE_LOGIN = "mobile_login"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [permission.value for permission in cls]


class SecurityStatus(str, Enum):
    """Security assessment recorded on a patrol round"""

    NORMAL = "normal"
    OBSERVATION = "observation"
    DANGER = "danger"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class ResolutionStatus(str, Enum):
    """Follow-up state of a patrol round"""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class VisitorStatus(str, Enum):
    """Whether a visitor is still on site"""

    INSIDE = "inside"
    LEFT = "left"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]


class ActivityEventType(str, Enum):
    """Kinds of entries written to the activity log"""

    LOGIN = "login"
    LOGOUT = "logout"
    PATROL = "patrol"
    VISITOR_ENTRY = "visitor_entry"
    VISITOR_EXIT = "visitor_exit"
    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    USER_DELETED = "user_deleted"
    PERMISSION_CHANGED = "permission_changed"
    LOCATION_CHANGED = "location_changed"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [event_type.value for event_type in cls]


class ActivityStatus(str, Enum):
    """Outcome attached to an activity log entry"""

    SUCCESS = "success"
    COMPLETED = "completed"
    REVIEW = "review"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]
