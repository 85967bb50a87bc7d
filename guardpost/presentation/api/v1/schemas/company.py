from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from guardpost.domain.enums import CompanyStatus
from guardpost.domain.policies import MAX_COMPANY_EXPIRY_DAYS
from guardpost.presentation.api.v1.schemas.user import UserResponse


class CompanyCreate(BaseModel):
    """Schema for provisioning a company together with its first admin"""

    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=32)
    subscription_plan: str | None = None
    max_users: int | None = Field(None, ge=1)
    expiry_days: int | None = Field(None, ge=1, le=MAX_COMPANY_EXPIRY_DAYS)
    admin_username: str = Field(..., min_length=3, max_length=64)
    admin_password: str = Field(..., min_length=6, max_length=128)
    admin_full_name: str = Field(..., min_length=1, max_length=255)


class CompanyUpdate(BaseModel):
    """Only supplied fields are changed"""

    name: str | None = Field(None, min_length=1, max_length=255)
    status: CompanyStatus | None = None
    expiry_date: datetime | None = None
    subscription_plan: str | None = None
    max_users: int | None = Field(None, ge=1)


class CompanyResponse(BaseModel):
    id: str
    name: str
    code: str
    subscription_plan: str
    max_users: int
    expiry_date: datetime | None
    status: CompanyStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompanyOverviewResponse(CompanyResponse):
    user_count: int
    patrol_count: int


class CompanyCreateResponse(BaseModel):
    company: CompanyResponse
    admin_user: UserResponse
