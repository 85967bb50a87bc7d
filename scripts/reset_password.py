"""Reset the password of an existing user"""
import asyncio
import sys

from guardpost.infrastructure.config.settings import get_settings
from guardpost.infrastructure.persistence.database import Database
from guardpost.infrastructure.persistence.repositories import CompanyRepository, UserRepository


async def reset_password(username: str, company_code: str, new_password: str) -> int:
    database = Database.from_settings(get_settings())
    try:
        async with database.transaction() as session:
            company = await CompanyRepository(session).get_by_code(company_code)
            if not company:
                print(f"Company '{company_code}' not found")
                return 1

            user_repo = UserRepository(session)
            user = await user_repo.get_by_username(company.id, username)
            if not user:
                print(f"User '{username}' not found in company '{company.code}'")
                return 1

            await user_repo.set_password(user, new_password)
    finally:
        await database.dispose()

    print(f"Password reset for '{username}' in company '{company_code.upper()}'")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 4:
        print("Usage: python -m scripts.reset_password <username> <company_code> <new_password>")
        sys.exit(1)

    username, company_code, new_password = sys.argv[1:]
    sys.exit(asyncio.run(reset_password(username, company_code, new_password)))
