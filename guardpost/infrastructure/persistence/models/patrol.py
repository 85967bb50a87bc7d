from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.domain.enums import ResolutionStatus, SecurityStatus
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import TenantModel
from guardpost.shared.utils.datetime import utc_now


class PatrolRound(TenantModel, Base):
    """A checkpoint visit logged by a guard"""

    __tablename__ = "patrol_round"
    __owner_column__ = "guard_id"

    guard_id: Mapped[str] = mapped_column(
        String, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    location: Mapped[str] = mapped_column(String, nullable=False)
    security_status: Mapped[str] = mapped_column(
        String, nullable=False, default=SecurityStatus.NORMAL.value
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Opaque references to externally stored files
    attachments: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    patrol_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )
    resolution_status: Mapped[str] = mapped_column(
        String, nullable=False, default=ResolutionStatus.PENDING.value
    )

    __table_args__ = (
        CheckConstraint(
            f"security_status IN {tuple(SecurityStatus.values())}",
            name="patrol_security_status_check",
        ),
        CheckConstraint(
            f"resolution_status IN {tuple(ResolutionStatus.values())}",
            name="patrol_resolution_status_check",
        ),
    )
