"""
Authentication Router

Endpoints:
- POST /login - Exchange registration number + passcode for JWT tokens
- POST /change-password - Replace the caller's passcode (bearer token)

Login is rate limited per client IP.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from infosys.core.auth import CurrentAccount, get_current_account
from infosys.core.database import get_db
from infosys.core.exceptions import AccountServiceError, to_http_exception
from infosys.core.rate_limit import client_ip, enforce_rate_limit
from infosys.core.security import create_access_token, create_refresh_token
from infosys.modules.accounts import AccountRepository
from infosys.modules.auth.schemas import (
    AccountResponse,
    ChangePasscodeRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from infosys.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_LOGIN = (10, 60)  # 10 attempts per minute per IP


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(AccountRepository(db))


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    responses={
        401: {"description": "Invalid registration number or passcode"},
        429: {"description": "Too many login attempts"},
    },
)
async def login(
    credentials: LoginRequest,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Authenticate a student or the admin and return JWT tokens.

    Unknown, unapproved and wrong-passcode logins all return the same 401.
    """
    limit, window = RATE_LIMIT_LOGIN
    await enforce_rate_limit(f"login:{client_ip(request)}", limit, window)

    try:
        account = await auth.login(credentials.reg_number, credentials.passcode)
    except AccountServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Login error: {e}")
        raise _internal_error() from e

    additional_claims = {
        "role": account.role.value,
        "regNumber": account.reg_number,
    }
    access_token = create_access_token(
        subject=str(account.id),
        additional_claims=additional_claims,
    )
    refresh_token = create_refresh_token(subject=str(account.id))

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=AccountResponse(
            id=account.id,
            name=account.name,
            reg_number=account.reg_number,
            email=account.email,
            role=account.role.value,
        ),
    )


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Passcode",
    responses={
        400: {"description": "New passcode too short"},
        401: {"description": "Missing token or wrong current passcode"},
    },
)
async def change_password(
    data: ChangePasscodeRequest,
    account: CurrentAccount = Depends(get_current_account),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    try:
        await auth.change_secret(account.id, data.current_passcode, data.new_passcode)
    except AccountServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Passcode change error for account {account.id}: {e}")
        raise _internal_error() from e

    return MessageResponse(message="Passcode changed successfully")
