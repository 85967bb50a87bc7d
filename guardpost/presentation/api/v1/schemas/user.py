from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from guardpost.domain.enums import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.GUARD
    email: str | None = None
    unit_number: str | None = None
    mobile_login_allowed: bool = False


class UserUpdate(BaseModel):
    """All fields optional; only supplied fields change"""

    full_name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = None
    role: UserRole | None = None
    unit_number: str | None = None
    password: str | None = Field(None, min_length=6, max_length=128)
    is_active: bool | None = None
    mobile_login_allowed: bool | None = None


class UserResponse(BaseModel):
    id: str
    company_id: str
    username: str
    full_name: str
    email: str | None
    role: UserRole
    unit_number: str | None
    is_active: bool
    mobile_login_allowed: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserWithStats(UserResponse):
    patrol_count: int = 0
