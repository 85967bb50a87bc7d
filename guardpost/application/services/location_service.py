"""Patrol checkpoint locations of a company."""

from typing import Any

from guardpost.application.services.activity_log_service import ActivityLogService
from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.domain.enums import ActivityEventType
from guardpost.domain.exceptions import ResourceNotFoundException, ValidationException
from guardpost.domain.policies import Action
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models.location import Location
from guardpost.infrastructure.persistence.repositories.location_repo import LocationRepository

UPDATABLE_LOCATION_FIELDS = ("name", "description", "is_active")


class LocationService:
    def __init__(
        self,
        location_repo: LocationRepository,
        authz: AuthorizationService,
        activity: ActivityLogService,
    ) -> None:
        self.location_repo = location_repo
        self.authz = authz
        self.activity = activity

    async def list_locations(
        self, scope: AccessScope, *, include_inactive: bool = False
    ) -> list[Location]:
        return await self.location_repo.list_for_company(
            scope.company_id, include_inactive=include_inactive
        )

    async def create_location(
        self, scope: AccessScope, *, code: str, name: str, description: str | None = None
    ) -> Location:
        await self.authz.require(scope, Action.MANAGE_LOCATIONS)

        code = code.strip().upper()
        if await self.location_repo.get_by_code(scope.company_id, code):
            raise ValidationException(f"Location code already exists: {code}", field="code")

        location = await self.location_repo.create(
            Location(company_id=scope.company_id, code=code, name=name, description=description)
        )
        await self._record(scope, f"Location {location.name} added")
        return location

    async def update_location(
        self, scope: AccessScope, location_id: str, changes: dict[str, Any]
    ) -> Location:
        await self.authz.require(scope, Action.MANAGE_LOCATIONS)
        location = await self._get(scope, location_id)

        for field in UPDATABLE_LOCATION_FIELDS:
            if field in changes and changes[field] is not None:
                setattr(location, field, changes[field])

        location = await self.location_repo.update(location)
        await self._record(scope, f"Location {location.name} updated")
        return location

    async def delete_location(self, scope: AccessScope, location_id: str) -> None:
        await self.authz.require(scope, Action.MANAGE_LOCATIONS)
        location = await self._get(scope, location_id)
        name = location.name
        await self.location_repo.delete(location)
        await self._record(scope, f"Location {name} removed")

    async def _get(self, scope: AccessScope, location_id: str) -> Location:
        location = await self.location_repo.get_in_company(location_id, scope.company_id)
        if not location:
            raise ResourceNotFoundException("Location", location_id)
        return location

    async def _record(self, scope: AccessScope, description: str) -> None:
        await self.activity.record(
            scope.company_id,
            ActivityEventType.LOCATION_CHANGED,
            description,
            user_id=scope.user_id,
        )
