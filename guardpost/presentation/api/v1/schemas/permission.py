from pydantic import BaseModel


class PermissionToggleRequest(BaseModel):
    role: str
    permission: str


class PermissionToggleResponse(BaseModel):
    role: str
    permission: str
    active: bool


class PermissionMatrixResponse(BaseModel):
    """Granted permissions per role, plus every known permission name"""

    roles: dict[str, list[str]]
    available_permissions: list[str]
