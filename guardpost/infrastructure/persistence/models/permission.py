from sqlalchemy import CheckConstraint, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.domain.enums import PermissionName, UserRole
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import TenantModel


class RolePermission(TenantModel, Base):
    """
    Grant of one permission to one role within one company.

    Presence of the row means granted; toggling off deletes it.
    """

    __tablename__ = "role_permission"

    role: Mapped[str] = mapped_column(String, nullable=False)
    permission: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "role", "permission", name="uq_role_permission"),
        CheckConstraint(f"role IN {tuple(UserRole.values())}", name="role_permission_role_check"),
        CheckConstraint(
            f"permission IN {tuple(PermissionName.values())}",
            name="role_permission_permission_check",
        ),
    )
