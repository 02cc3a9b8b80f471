"""
Registrations Router

Public sign-up endpoint. No authentication is required since it is used
before the student has an account.

Endpoints:
- POST /signup - Submit a registration for admin approval
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from infosys.core.database import get_db
from infosys.core.exceptions import AccountServiceError, to_http_exception
from infosys.modules.accounts import AccountRepository
from infosys.modules.registrations.schemas import SignupRequest, SignupResponse
from infosys.modules.registrations.service import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_registration_service(db: AsyncSession = Depends(get_db)) -> RegistrationService:
    """Build a RegistrationService bound to the request's session."""
    return RegistrationService(AccountRepository(db))


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Student Sign-up",
    description="""
Register a student account. The account stays pending until an admin
approves it, at which point a passcode is emailed to the student.

**Validation:**
- `name`, `regNumber` and `email` are required
- `regNumber` must look like `24/is/co/346`
- Registration number and email are case-insensitive and must be unused
""",
    responses={
        201: {"description": "Registration submitted", "model": SignupResponse},
        400: {"description": "Invalid input (field named in the message)"},
        409: {"description": "Registration number or email already registered"},
        503: {"description": "Account store temporarily unavailable"},
    },
)
async def signup(
    data: SignupRequest,
    registrations: RegistrationService = Depends(get_registration_service),
) -> SignupResponse:
    try:
        user_id = await registrations.sign_up(data.name, data.reg_number, data.email)
        return SignupResponse(user_id=user_id)

    except AccountServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Signup error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
            },
        ) from e
