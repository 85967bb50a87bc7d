"""
Domain exceptions for Guardpost.

Every failure a client can observe is one of the exceptions below. They are
raised by services and dependencies and translated to HTTP responses by the
handlers in guardpost.presentation.api.errors.
"""

from typing import Any


class GuardpostException(Exception):
    """
    Base exception for all Guardpost application errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidCompanyError(GuardpostException):
    """Raised when a login names a company code that does not exist."""

    def __init__(self, message: str = "Invalid company code"):
        super().__init__(message, "INVALID_COMPANY")


class CompanySuspendedError(GuardpostException):
    """Raised when a login targets a suspended company."""

    def __init__(self, message: str = "Company account is suspended"):
        super().__init__(message, "COMPANY_SUSPENDED")


class CompanyExpiredError(GuardpostException):
    """Raised when a login targets a company whose subscription has expired."""

    def __init__(self, message: str = "Company subscription has expired"):
        super().__init__(message, "COMPANY_EXPIRED")


class InvalidCredentialsError(GuardpostException):
    """Raised for unknown users, inactive users and wrong passwords alike."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, "INVALID_CREDENTIALS")


class MobileLoginRestrictedError(GuardpostException):
    """Raised when a mobile login is attempted without mobile access."""

    def __init__(self, message: str = "Mobile login is not allowed for this account"):
        super().__init__(message, "MOBILE_LOGIN_RESTRICTED")


class AuthenticationException(GuardpostException):
    """Raised when a request carries no valid session token."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "UNAUTHENTICATED")


class PermissionDeniedError(GuardpostException):
    """Permission denied - role gate, grant or ownership check failed."""

    def __init__(
        self,
        message: str = "Permission denied",
        action: str | None = None,
        permission: str | None = None,
    ):
        details: dict[str, Any] = {}
        if action:
            details["action"] = action
        if permission:
            details["permission"] = permission
        super().__init__(message, "FORBIDDEN", details)


class ResourceNotFoundException(GuardpostException):
    """Raised when a requested resource is not found in the caller's scope."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateCompanyCodeError(GuardpostException):
    """Raised when provisioning a company whose code is already taken."""

    def __init__(self, code: str):
        super().__init__(
            f"Company code already exists: {code}",
            "DUPLICATE_COMPANY_CODE",
            {"code": code},
        )


class ValidationException(GuardpostException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SystemFailureError(GuardpostException):
    """Raised when an unexpected internal failure must be reported generically."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, "SYSTEM_ERROR")
