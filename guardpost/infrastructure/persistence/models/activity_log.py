from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from guardpost.domain.enums import ActivityEventType, ActivityStatus
from guardpost.infrastructure.persistence.database import Base
from guardpost.infrastructure.persistence.models.mixins import CompanyMixin, CuidMixin
from guardpost.shared.utils.datetime import utc_now


class ActivityLog(CuidMixin, CompanyMixin, Base):
    """
    Append-only audit trail of security-relevant actions.

    Rows are never updated; references to deleted users, visitors or
    patrols are nulled while the description is kept.
    """

    __tablename__ = "activity_log"
    __owner_column__ = "user_id"

    event_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    visitor_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("visitor.id", ondelete="SET NULL"), nullable=True
    )
    patrol_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("patrol_round.id", ondelete="SET NULL"), nullable=True
    )
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=ActivityStatus.SUCCESS.value
    )
    event_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )

    __table_args__ = (
        CheckConstraint(
            f"event_type IN {tuple(ActivityEventType.values())}", name="activity_event_type_check"
        ),
        CheckConstraint(f"status IN {tuple(ActivityStatus.values())}", name="activity_status_check"),
    )
