from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.domain.enums import VisitorStatus
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import TenantModel
from guardpost.shared.utils.datetime import utc_now


class Visitor(TenantModel, Base):
    """A visitor entry, optionally closed by a checkout"""

    __tablename__ = "visitor"
    __owner_column__ = "registered_by"

    # Nulled when the registering user is deleted
    registered_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    id_number: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    visitor_company: Mapped[str | None] = mapped_column(String, nullable=True)
    host_name: Mapped[str | None] = mapped_column(String, nullable=True)
    visit_reason: Mapped[str | None] = mapped_column(String, nullable=True)
    gate_number: Mapped[str] = mapped_column(String, nullable=False, default="1")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    entry_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )
    exit_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=VisitorStatus.INSIDE.value, index=True
    )

    __table_args__ = (
        CheckConstraint(f"status IN {tuple(VisitorStatus.values())}", name="visitor_status_check"),
    )
