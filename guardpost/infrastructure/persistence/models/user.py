from sqlalchemy import Boolean, CheckConstraint, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.domain.enums import UserRole
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import TenantModel


class User(TenantModel, Base):
    """Company member. Usernames are unique per company, case-insensitively."""

    __tablename__ = "user"

    username: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default=UserRole.GUARD.value)
    unit_number: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    mobile_login_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint(f"role IN {tuple(UserRole.values())}", name="user_role_check"),
    )


Index(
    "uq_user_company_username_lower",
    User.company_id,
    func.lower(User.username),
    unique=True,
)
