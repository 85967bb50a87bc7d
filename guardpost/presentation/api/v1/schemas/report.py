from datetime import datetime

from pydantic import BaseModel, ConfigDict

from guardpost.domain.enums import ActivityEventType, ActivityStatus


class ActivityLogResponse(BaseModel):
    id: str
    company_id: str
    event_type: ActivityEventType
    description: str
    user_id: str | None
    visitor_id: str | None
    patrol_id: str | None
    location: str | None
    status: ActivityStatus
    event_time: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportSummaryResponse(BaseModel):
    visitors_total: int
    visitors_inside: int
    patrols_total: int
    patrols_by_status: dict[str, int]
    activity_total: int

    model_config = ConfigDict(from_attributes=True)
