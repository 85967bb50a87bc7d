"""
Bootstrap the platform company and a super_admin account.

Usage:
    python -m scripts.create_super_admin --username root --password 'change-me'
"""
import argparse
import asyncio
import sys

from guardpost.domain.enums import CompanyStatus, UserRole
from guardpost.infrastructure.config.settings import get_settings
from guardpost.infrastructure.persistence.database import Database
from guardpost.infrastructure.persistence.models import Company
from guardpost.infrastructure.persistence.repositories import CompanyRepository, UserRepository


async def create_super_admin(username: str, password: str, full_name: str) -> int:
    settings = get_settings()
    database = Database.from_settings(settings)

    try:
        if settings.auto_create_schema:
            await database.create_all()

        async with database.transaction() as session:
            company_repo = CompanyRepository(session)
            user_repo = UserRepository(session)

            company = await company_repo.get_by_code(settings.platform_company_code)
            if not company:
                company = await company_repo.create(
                    Company(
                        name="Platform Administration",
                        code=settings.platform_company_code,
                        subscription_plan="platform",
                        max_users=1000,
                        expiry_date=None,
                        status=CompanyStatus.ACTIVE.value,
                    )
                )
                print(f"Created platform company '{company.code}'")

            if await user_repo.get_by_username(company.id, username):
                print(f"User '{username}' already exists in company '{company.code}'")
                return 1

            await user_repo.create_user(
                company_id=company.id,
                username=username,
                password=password,
                full_name=full_name,
                role=UserRole.SUPER_ADMIN.value,
                mobile_login_allowed=True,
            )
    finally:
        await database.dispose()

    print("Super admin created.")
    print("\nLogin with:")
    print(f"  Company Code: {settings.platform_company_code}")
    print(f"  Username: {username}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the platform super_admin account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--full-name", default="Platform Administrator")
    args = parser.parse_args(argv)

    if len(args.password) < 8:
        parser.error("password must be at least 8 characters")

    return asyncio.run(create_super_admin(args.username, args.password, args.full_name))


if __name__ == "__main__":
    sys.exit(main())
