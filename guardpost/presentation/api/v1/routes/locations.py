from typing import Annotated

from fastapi import APIRouter, Depends, status

from guardpost.application.services.location_service import LocationService
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_current_user,
    get_location_service,
    get_location_service_transactional,
    require_admin,
)
from guardpost.presentation.api.v1.schemas.location import (
    LocationCreate,
    LocationResponse,
    LocationUpdate,
)

router = APIRouter()


@router.get("", response_model=list[LocationResponse])
async def list_locations(
    scope: Annotated[AccessScope, Depends(get_current_user)],
    service: Annotated[LocationService, Depends(get_location_service)],
    include_inactive: bool = False,
):
    locations = await service.list_locations(scope, include_inactive=include_inactive)
    return [LocationResponse.model_validate(location) for location in locations]


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    data: LocationCreate,
    scope: Annotated[AccessScope, Depends(require_admin)],
    service: Annotated[LocationService, Depends(get_location_service_transactional)],
):
    location = await service.create_location(
        scope, code=data.code, name=data.name, description=data.description
    )
    return LocationResponse.model_validate(location)


@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: str,
    data: LocationUpdate,
    scope: Annotated[AccessScope, Depends(require_admin)],
    service: Annotated[LocationService, Depends(get_location_service_transactional)],
):
    location = await service.update_location(
        scope, location_id, data.model_dump(exclude_unset=True)
    )
    return LocationResponse.model_validate(location)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    location_id: str,
    scope: Annotated[AccessScope, Depends(require_admin)],
    service: Annotated[LocationService, Depends(get_location_service_transactional)],
):
    await service.delete_location(scope, location_id)
