"""
Account Service Exceptions

Domain errors raised by the registration and authentication services.
Each carries a stable error code and the HTTP status the API layer maps it to.
"""

from fastapi import HTTPException


class AccountServiceError(Exception):
    """Base exception for account service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class InvalidInputError(AccountServiceError):
    """Raised when signup or passcode input fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(
            message=message,
            error_code="INVALID_INPUT",
            status_code=400,
        )


class AccountAlreadyExistsError(AccountServiceError):
    """Raised when the registration number or email is already registered."""

    def __init__(self):
        super().__init__(
            message="Registration number or email already registered",
            error_code="ACCOUNT_ALREADY_EXISTS",
            status_code=409,
        )


class AccountNotFoundError(AccountServiceError):
    """Raised when an account is missing or not in the state an operation requires."""

    def __init__(self, account_id: int | None = None, status: str | None = None):
        subject = f"{status.capitalize()} account" if status else "Account"
        message = f"{subject} {account_id} not found" if account_id else f"{subject} not found"
        super().__init__(
            message=message,
            error_code="ACCOUNT_NOT_FOUND",
            status_code=404,
        )


# One message for every login failure so callers cannot tell
# unknown, unapproved and wrong-passcode accounts apart.
INVALID_CREDENTIALS_MESSAGE = "Invalid registration number or passcode."


class InvalidCredentialsError(AccountServiceError):
    """Raised for any failed passcode check."""

    def __init__(self):
        super().__init__(
            message=INVALID_CREDENTIALS_MESSAGE,
            error_code="INVALID_CREDENTIALS",
            status_code=401,
        )


class WeakSecretError(AccountServiceError):
    """Raised when a new passcode is too short."""

    def __init__(self, min_length: int):
        self.min_length = min_length
        super().__init__(
            message=f"New passcode must be at least {min_length} characters long",
            error_code="WEAK_PASSCODE",
            status_code=400,
        )


class UnauthorizedError(AccountServiceError):
    """Raised when the caller's role does not permit the operation."""

    def __init__(self, message: str = "Admin access is required for this endpoint."):
        super().__init__(
            message=message,
            error_code="ADMIN_ACCESS_REQUIRED",
            status_code=403,
        )


class StoreUnavailableError(AccountServiceError):
    """Raised when the account store fails or times out. Safe to retry."""

    def __init__(self, message: str = "The account store is temporarily unavailable."):
        super().__init__(
            message=message,
            error_code="STORE_UNAVAILABLE",
            status_code=503,
        )


def to_http_exception(error: AccountServiceError) -> HTTPException:
    """Convert a service error to the API's {"error", "message"} response."""
    return HTTPException(
        status_code=error.status_code,
        detail={
            "error": error.error_code,
            "message": error.message,
        },
    )


__all__ = [
    "to_http_exception",
    "AccountServiceError",
    "InvalidInputError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "InvalidCredentialsError",
    "INVALID_CREDENTIALS_MESSAGE",
    "WeakSecretError",
    "UnauthorizedError",
    "StoreUnavailableError",
]
