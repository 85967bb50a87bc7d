"""
Company domain entity.

This represents the business concept of a tenant company, independent of
how it's stored in the database.
"""

from dataclasses import dataclass
from datetime import datetime

from guardpost.domain.enums import CompanyStatus
from guardpost.domain.exceptions import CompanyExpiredError, CompanySuspendedError
from guardpost.shared.utils.datetime import ensure_utc


@dataclass
class CompanyEntity:
    """
    Domain entity for Company (business rules separate from persistence)
    """

    id: str
    code: str
    name: str
    status: CompanyStatus
    expiry_date: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        """A company is expired when flagged so or past its expiry date"""
        if self.status == CompanyStatus.EXPIRED:
            return True
        return self.expiry_date is not None and ensure_utc(now) > ensure_utc(self.expiry_date)

    def ensure_can_login(self, now: datetime) -> None:
        """
        Business rule: users may only log in to active, unexpired companies.

        Suspension is checked before expiry.
        """
        if self.status == CompanyStatus.SUSPENDED:
            raise CompanySuspendedError()
        if self.is_expired(now):
            raise CompanyExpiredError()
