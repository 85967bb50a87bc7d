from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.domain.entities.company import CompanyEntity
from guardpost.domain.enums import CompanyStatus
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Company(CuidMixin, TimestampMixin, Base):
    """
    Root tenant entity.

    Company has no company_id since it is the root of the hierarchy.
    Codes are stored upper-case and compared case-insensitively.
    """

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    subscription_plan: Mapped[str] = mapped_column(String, nullable=False, default="basic")
    max_users: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=CompanyStatus.ACTIVE.value, index=True
    )

    __table_args__ = (
        CheckConstraint(f"status IN {tuple(CompanyStatus.values())}", name="company_status_check"),
        CheckConstraint("max_users >= 1", name="company_max_users_check"),
    )

    def to_entity(self) -> CompanyEntity:
        return CompanyEntity(
            id=self.id,
            code=self.code,
            name=self.name,
            status=CompanyStatus(self.status),
            expiry_date=self.expiry_date,
        )
