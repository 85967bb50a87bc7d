from fastapi import APIRouter

from guardpost.presentation.api.v1.routes import (
    auth,
    locations,
    patrols,
    permissions,
    reports,
    super_admin,
    users,
    visitors,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(patrols.router, prefix="/patrols", tags=["patrols"])
api_router.include_router(visitors.router, prefix="/visitors", tags=["visitors"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(super_admin.router, prefix="/super-admin", tags=["super-admin"])
