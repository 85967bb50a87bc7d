from sqlalchemy import Boolean, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import TenantModel


class Location(TenantModel, Base):
    """Predefined patrol checkpoint of a company"""

    __tablename__ = "location"

    code: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (UniqueConstraint("company_id", "code", name="uq_location_company_code"),)
