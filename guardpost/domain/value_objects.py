"""Value objects for Guardpost domain."""

import re
from dataclasses import dataclass

from guardpost.domain.enums import UserRole
from guardpost.domain.policies import is_privileged

_COMPANY_CODE_PATTERN = re.compile(r"^[A-Z0-9]+([_-][A-Z0-9]+)*$")


@dataclass(frozen=True)
class CompanyCode:
    """
    Value object for a company login code.

    Company codes are:
    - 2-32 characters
    - stored upper-case (input is normalized)
    - alphanumeric with optional hyphen or underscore separators
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Company code must be a non-empty string")

        normalized = self.value.strip().upper()
        object.__setattr__(self, "value", normalized)

        if len(normalized) < 2 or len(normalized) > 32:
            raise ValueError("Company code must be 2-32 characters")

        if not _COMPANY_CODE_PATTERN.match(normalized):
            raise ValueError(
                "Company code must be alphanumeric with optional hyphens or underscores "
                "(e.g., 'ACME', 'ACME-NORTH')"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AccessScope:
    """
    The acting identity of an authenticated request.

    Built from verified session token claims. Every tenant-scoped query is
    derived from this object, never from client-supplied identifiers.
    """

    user_id: str
    company_id: str
    role: UserRole
    username: str = ""
    full_name: str = ""
    unit_number: str | None = None

    @property
    def sees_all_rows(self) -> bool:
        """Privileged roles see every row in their company"""
        return is_privileged(self.role)

    @property
    def is_super_admin(self) -> bool:
        return self.role is UserRole.SUPER_ADMIN

    def owns(self, owner_id: str | None) -> bool:
        return owner_id is not None and owner_id == self.user_id

    def can_mutate(self, owner_id: str | None) -> bool:
        """Owner-or-privileged rule for updates and deletes"""
        return self.sees_all_rows or self.owns(owner_id)
