from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from guardpost.domain.enums import ResolutionStatus, SecurityStatus


class PatrolCreate(BaseModel):
    location: str = Field(..., min_length=1, max_length=255)
    security_status: SecurityStatus = SecurityStatus.NORMAL
    notes: str | None = None
    attachments: list[str] = Field(
        default_factory=list, description="References to externally stored files"
    )


class PatrolUpdate(BaseModel):
    location: str | None = Field(None, min_length=1, max_length=255)
    security_status: SecurityStatus | None = None
    notes: str | None = None


class PatrolResolutionUpdate(BaseModel):
    resolution_status: ResolutionStatus


class PatrolResponse(BaseModel):
    id: str
    company_id: str
    guard_id: str
    location: str
    security_status: SecurityStatus
    notes: str | None
    attachments: list[str]
    patrol_time: datetime
    resolution_status: ResolutionStatus

    model_config = ConfigDict(from_attributes=True)


class ShiftStatusResponse(BaseModel):
    completed: int
    expected: int
    remaining: int
    normal: int
    observation: int
    danger: int

    model_config = ConfigDict(from_attributes=True)
