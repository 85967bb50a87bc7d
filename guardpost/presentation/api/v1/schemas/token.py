from pydantic import BaseModel, Field

from guardpost.domain.enums import UserRole
from guardpost.presentation.api.v1.schemas.user import UserResponse


class TokenPayload(BaseModel):
    """Session token claims"""

    sub: str = Field(..., description="User ID (subject)")
    company_id: str = Field(..., description="Company the user belongs to")
    role: UserRole
    username: str = ""
    full_name: str = ""
    unit_number: str | None = None
    exp: int = Field(..., description="Token expiration timestamp")


class LoginRequest(BaseModel):
    company_code: str = Field(..., min_length=1, description="Company code for tenant isolation")
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
