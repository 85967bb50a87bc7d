from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from guardpost.domain.enums import VisitorStatus


class VisitorCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    id_number: str = Field(..., min_length=1, max_length=64)
    phone: str | None = None
    visitor_company: str | None = None
    host_name: str | None = None
    visit_reason: str | None = None
    gate_number: str = "1"
    notes: str | None = None


class VisitorResponse(BaseModel):
    id: str
    company_id: str
    registered_by: str | None
    full_name: str
    id_number: str
    phone: str | None
    visitor_company: str | None
    host_name: str | None
    visit_reason: str | None
    gate_number: str
    notes: str | None
    entry_time: datetime
    exit_time: datetime | None
    status: VisitorStatus

    model_config = ConfigDict(from_attributes=True)


class VisitorStatsResponse(BaseModel):
    today_total: int
    inside: int
    left: int
    yesterday_total: int
    change_percent: float

    model_config = ConfigDict(from_attributes=True)
