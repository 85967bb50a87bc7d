"""
Company provisioning for platform super-admins.

Creating a company writes the company row, its first admin user, the default
permission grants and the default locations. All of it runs on one session
inside the caller's transaction, so a failure at any step leaves nothing
behind.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError

from guardpost.application.services.authorization_service import AuthorizationService
from guardpost.application.services.company_initialization_service import (
    CompanyInitializationService,
)
from guardpost.domain.enums import CompanyStatus, UserRole
from guardpost.domain.exceptions import (
    DuplicateCompanyCodeError,
    ResourceNotFoundException,
    ValidationException,
)
from guardpost.domain.policies import MAX_COMPANY_EXPIRY_DAYS, Action
from guardpost.domain.value_objects import AccessScope, CompanyCode
from guardpost.infrastructure.persistence.models.company import Company
from guardpost.infrastructure.persistence.models.user import User
from guardpost.infrastructure.persistence.repositories.company_repo import CompanyRepository
from guardpost.infrastructure.persistence.repositories.user_repo import UserRepository
from guardpost.shared.telemetry.logging import get_logger
from guardpost.shared.telemetry.tracing import traced
from guardpost.shared.utils import utc_now

logger = get_logger(__name__)

UPDATABLE_COMPANY_FIELDS = ("status", "expiry_date", "name", "subscription_plan", "max_users")
NON_NULLABLE_COMPANY_FIELDS = ("status", "name", "subscription_plan", "max_users")


@dataclass
class ProvisioningResult:
    """Result of company creation"""

    company: Company
    admin_user: User


@dataclass
class CompanyOverview:
    """Company with usage counters for the super-admin dashboard"""

    company: Company
    user_count: int
    patrol_count: int


class CompanyProvisioningService:
    def __init__(
        self,
        company_repo: CompanyRepository,
        user_repo: UserRepository,
        init_service: CompanyInitializationService,
        authz: AuthorizationService,
        *,
        platform_company_code: str,
        default_expiry_days: int = 30,
        default_max_users: int = 10,
        default_plan: str = "basic",
    ) -> None:
        self.company_repo = company_repo
        self.user_repo = user_repo
        self.init_service = init_service
        self.authz = authz
        self.platform_company_code = platform_company_code.upper()
        self.default_expiry_days = default_expiry_days
        self.default_max_users = default_max_users
        self.default_plan = default_plan

    @traced("provisioning.create_company")
    async def create_company(
        self,
        scope: AccessScope,
        *,
        name: str,
        code: str,
        admin_username: str,
        admin_password: str,
        admin_full_name: str,
        subscription_plan: str | None = None,
        max_users: int | None = None,
        expiry_days: int | None = None,
    ) -> ProvisioningResult:
        """
        Create a company with its admin user and default data.

        Raises:
            PermissionDeniedError: caller is not super_admin
            ValidationException: malformed company code or expiry_days out of range
            DuplicateCompanyCodeError: code already taken
        """
        await self.authz.require(scope, Action.MANAGE_COMPANIES)

        try:
            company_code = CompanyCode(code)
        except ValueError as e:
            raise ValidationException(str(e), field="code") from e

        if await self.company_repo.get_by_code(company_code.value):
            raise DuplicateCompanyCodeError(company_code.value)

        days = expiry_days if expiry_days is not None else self.default_expiry_days
        if not 1 <= days <= MAX_COMPANY_EXPIRY_DAYS:
            raise ValidationException(
                f"expiry_days must be between 1 and {MAX_COMPANY_EXPIRY_DAYS}",
                field="expiry_days",
            )
        company = Company(
            name=name,
            code=company_code.value,
            subscription_plan=subscription_plan or self.default_plan,
            max_users=max_users if max_users is not None else self.default_max_users,
            expiry_date=utc_now() + timedelta(days=days),
            status=CompanyStatus.ACTIVE.value,
        )
        try:
            company = await self.company_repo.create(company)
        except IntegrityError as e:
            # Concurrent insert of the same code won the race
            raise DuplicateCompanyCodeError(company_code.value) from e

        admin_user = await self.user_repo.create_user(
            company_id=company.id,
            username=admin_username,
            password=admin_password,
            full_name=admin_full_name,
            role=UserRole.ADMIN.value,
        )
        await self.init_service.initialize_company(company.id)

        logger.info(
            "Company provisioned: code=%s id=%s by super admin %s",
            company.code,
            company.id,
            scope.user_id,
        )
        return ProvisioningResult(company=company, admin_user=admin_user)

    async def update_company(
        self, scope: AccessScope, company_id: str, changes: dict[str, Any]
    ) -> Company:
        """
        Apply only the supplied fields and stamp updated_at.

        An explicit null expiry_date means the company never expires. Null is
        rejected for every other field.

        Raises:
            ValidationException: no updatable field supplied, or null for a
                required field
            ResourceNotFoundException: unknown company id
        """
        await self.authz.require(scope, Action.MANAGE_COMPANIES)

        updates = {
            field: value for field, value in changes.items() if field in UPDATABLE_COMPANY_FIELDS
        }
        if not updates:
            raise ValidationException("No fields to update")
        for field in NON_NULLABLE_COMPANY_FIELDS:
            if field in updates and updates[field] is None:
                raise ValidationException(f"{field} cannot be null", field=field)

        company = await self.company_repo.get_by_id(company_id)
        if not company:
            raise ResourceNotFoundException("Company", company_id)

        if "status" in updates:
            try:
                updates["status"] = CompanyStatus(updates["status"]).value
            except ValueError as e:
                raise ValidationException(
                    f"Unknown company status: {updates['status']}", field="status"
                ) from e

        for field, value in updates.items():
            setattr(company, field, value)
        company.updated_at = utc_now()

        updated = await self.company_repo.update(company)
        logger.info("Company %s updated fields: %s", company_id, ", ".join(sorted(updates)))
        return updated

    async def list_companies(self, scope: AccessScope) -> list[CompanyOverview]:
        await self.authz.require(scope, Action.MANAGE_COMPANIES)
        rows = await self.company_repo.list_with_counts()
        return [CompanyOverview(company, users, patrols) for company, users, patrols in rows]

    async def get_company(self, scope: AccessScope, company_id: str) -> CompanyOverview:
        await self.authz.require(scope, Action.MANAGE_COMPANIES)
        row = await self.company_repo.get_with_counts(company_id)
        if row is None:
            raise ResourceNotFoundException("Company", company_id)
        return CompanyOverview(*row)

    async def delete_company(self, scope: AccessScope, company_id: str) -> None:
        """Delete a company and all of its tenant data. The platform company is protected."""
        await self.authz.require(scope, Action.MANAGE_COMPANIES)

        company = await self.company_repo.get_by_id(company_id)
        if not company:
            raise ResourceNotFoundException("Company", company_id)
        if company.code.upper() == self.platform_company_code:
            raise ValidationException("The platform company cannot be deleted")

        await self.company_repo.delete_with_tenant_data(company)
        logger.info("Company deleted: code=%s id=%s by %s", company.code, company.id, scope.user_id)
