from guardpost.infrastructure.persistence.models.activity_log import ActivityLog
from guardpost.infrastructure.persistence.models.company import Company
from guardpost.infrastructure.persistence.models.location import Location
from guardpost.infrastructure.persistence.models.patrol import PatrolRound
from guardpost.infrastructure.persistence.models.permission import RolePermission
from guardpost.infrastructure.persistence.models.user import User
from guardpost.infrastructure.persistence.models.visitor import Visitor

__all__ = [
    "ActivityLog",
    "Company",
    "Location",
    "PatrolRound",
    "RolePermission",
    "User",
    "Visitor",
]
