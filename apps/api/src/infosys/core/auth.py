"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
Validates the bearer JWT issued at login and enforces the admin role on the
registration management endpoints.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infosys.core.exceptions import UnauthorizedError, to_http_exception
from infosys.core.security import decode_token

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token issued by POST /api/login",
)

ADMIN_ROLE = "admin"


@dataclass
class CurrentAccount:
    """
    The caller, as described by the claims of their access token.

    Attributes:
        id: Account id
        role: "student" or "admin"
        reg_number: Normalised registration number
    """

    id: int
    role: str
    reg_number: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def _unauthenticated(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def account_from_token(token: str) -> CurrentAccount:
    """
    Validate an access token and extract the caller.

    Raises:
        HTTPException 401: If the token is invalid, expired, not an access
            token, or missing claims
    """
    payload = decode_token(token)

    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthenticated("INVALID_TOKEN", "Invalid or expired authentication token.")

    if payload.get("type") != "access":
        logger.warning(f"Invalid token type: {payload.get('type')}")
        raise _unauthenticated("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    try:
        return CurrentAccount(
            id=int(payload["sub"]),
            role=str(payload["role"]),
            reg_number=str(payload.get("regNumber", "")),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Invalid token claims: {e}")
        raise _unauthenticated(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e


async def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentAccount:
    """
    FastAPI dependency returning the authenticated account.

    Raises:
        HTTPException 401: If no valid bearer token is supplied
    """
    if credentials is None:
        raise _unauthenticated("NOT_AUTHENTICATED", "Authentication is required.")

    return account_from_token(credentials.credentials)


async def get_current_admin(
    account: CurrentAccount = Depends(get_current_account),
) -> CurrentAccount:
    """
    FastAPI dependency that additionally requires the admin role.

    Raises:
        HTTPException 401: If no valid bearer token is supplied
        HTTPException 403: If the caller is not the admin
    """
    if not account.is_admin:
        logger.warning(
            f"Access denied: account {account.id} has role '{account.role}', "
            f"but '{ADMIN_ROLE}' is required"
        )
        raise to_http_exception(UnauthorizedError())

    logger.debug(f"Authenticated admin: {account.id}")
    return account


__all__ = [
    "CurrentAccount",
    "account_from_token",
    "get_current_account",
    "get_current_admin",
]
