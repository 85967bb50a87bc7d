"""
Company initialization: default data written for every new company.

- Default permission grants per role
- Default patrol checkpoint locations
"""

from guardpost.domain.policies import DEFAULT_LOCATIONS, DEFAULT_PERMISSION_GRANTS
from guardpost.infrastructure.persistence.repositories.location_repo import LocationRepository
from guardpost.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from guardpost.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class CompanyInitializationService:
    def __init__(
        self, permission_repo: PermissionRepository, location_repo: LocationRepository
    ) -> None:
        self.permission_repo = permission_repo
        self.location_repo = location_repo

    async def initialize_company(self, company_id: str) -> None:
        grants = [
            (role.value, permission.value)
            for role, permissions in DEFAULT_PERMISSION_GRANTS.items()
            for permission in permissions
        ]
        granted = await self.permission_repo.grant_many(company_id, grants)
        seeded = await self.location_repo.add_many(company_id, DEFAULT_LOCATIONS)

        logger.info(
            "Initialized company %s: %d permission grants, %d locations",
            company_id,
            granted,
            seeded,
        )
