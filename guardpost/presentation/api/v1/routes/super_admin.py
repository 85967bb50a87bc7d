from typing import Annotated

from fastapi import APIRouter, Depends, status

from guardpost.application.services.company_provisioning_service import (
    CompanyOverview,
    CompanyProvisioningService,
)
from guardpost.domain.value_objects import AccessScope
from guardpost.presentation.api.dependencies import (
    get_provisioning_service,
    get_provisioning_service_transactional,
    require_super_admin,
)
from guardpost.presentation.api.v1.schemas.company import (
    CompanyCreate,
    CompanyCreateResponse,
    CompanyOverviewResponse,
    CompanyResponse,
    CompanyUpdate,
)
from guardpost.presentation.api.v1.schemas.user import UserResponse

router = APIRouter()


def _overview(item: CompanyOverview) -> CompanyOverviewResponse:
    return CompanyOverviewResponse(
        **CompanyResponse.model_validate(item.company).model_dump(),
        user_count=item.user_count,
        patrol_count=item.patrol_count,
    )


@router.get("/companies", response_model=list[CompanyOverviewResponse])
async def list_companies(
    scope: Annotated[AccessScope, Depends(require_super_admin)],
    service: Annotated[CompanyProvisioningService, Depends(get_provisioning_service)],
):
    return [_overview(item) for item in await service.list_companies(scope)]


@router.post("/companies", response_model=CompanyCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyCreate,
    scope: Annotated[AccessScope, Depends(require_super_admin)],
    service: Annotated[
        CompanyProvisioningService, Depends(get_provisioning_service_transactional)
    ],
):
    """
    Provision a company with its admin user, default permissions and locations.

    Runs in a single transaction: on any failure nothing is created.
    """
    result = await service.create_company(scope, **data.model_dump())
    return CompanyCreateResponse(
        company=CompanyResponse.model_validate(result.company),
        admin_user=UserResponse.model_validate(result.admin_user),
    )


@router.get("/companies/{company_id}", response_model=CompanyOverviewResponse)
async def get_company(
    company_id: str,
    scope: Annotated[AccessScope, Depends(require_super_admin)],
    service: Annotated[CompanyProvisioningService, Depends(get_provisioning_service)],
):
    return _overview(await service.get_company(scope, company_id))


@router.put("/companies/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    scope: Annotated[AccessScope, Depends(require_super_admin)],
    service: Annotated[
        CompanyProvisioningService, Depends(get_provisioning_service_transactional)
    ],
):
    """Change only the supplied fields (status, expiry_date, name, subscription_plan, max_users)"""
    company = await service.update_company(scope, company_id, data.model_dump(exclude_unset=True))
    return CompanyResponse.model_validate(company)


@router.delete("/companies/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    company_id: str,
    scope: Annotated[AccessScope, Depends(require_super_admin)],
    service: Annotated[
        CompanyProvisioningService, Depends(get_provisioning_service_transactional)
    ],
):
    await service.delete_company(scope, company_id)
