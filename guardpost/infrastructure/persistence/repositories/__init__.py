from guardpost.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from guardpost.infrastructure.persistence.repositories.base import BaseRepository
from guardpost.infrastructure.persistence.repositories.company_repo import CompanyRepository
from guardpost.infrastructure.persistence.repositories.location_repo import LocationRepository
from guardpost.infrastructure.persistence.repositories.patrol_repo import PatrolRepository
from guardpost.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from guardpost.infrastructure.persistence.repositories.scoped import TenantScopedRepository
from guardpost.infrastructure.persistence.repositories.user_repo import UserRepository
from guardpost.infrastructure.persistence.repositories.visitor_repo import VisitorRepository

__all__ = [
    "ActivityLogRepository",
    "BaseRepository",
    "CompanyRepository",
    "LocationRepository",
    "PatrolRepository",
    "PermissionRepository",
    "TenantScopedRepository",
    "UserRepository",
    "VisitorRepository",
]
