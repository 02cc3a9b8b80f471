"""
Registrations Admin Router

API endpoints for the department admin to review and approve sign-ups.
All endpoints require a valid access token carrying the admin role.

Endpoints:
- GET /pending-registrations - List pending registrations, newest first
- POST /confirm-registration - Approve a registration (userId in body)
- POST /confirm-registration/{user_id} - Approve a registration (id in path)

Security:
- Approvals are rate limited per admin
- The one-time passcode is emailed to the student; it is echoed in the
  response only for demo deployments outside production
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from infosys.core.auth import CurrentAccount, get_current_admin
from infosys.core.config import settings
from infosys.core.exceptions import AccountServiceError, to_http_exception
from infosys.core.rate_limit import enforce_rate_limit
from infosys.modules.registrations.router import get_registration_service
from infosys.modules.registrations.schemas import (
    ConfirmRegistrationRequest,
    ConfirmRegistrationResponse,
    PendingRegistrationItem,
)
from infosys.modules.registrations.service import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_APPROVE = (30, 60)  # 30 approvals per minute


@router.get(
    "/pending-registrations",
    response_model=list[PendingRegistrationItem],
    summary="List Pending Registrations",
    responses={
        401: {"description": "Unauthorized - invalid or missing token"},
        403: {"description": "Forbidden - not the admin"},
    },
)
async def list_pending_registrations(
    registrations: RegistrationService = Depends(get_registration_service),
    admin: CurrentAccount = Depends(get_current_admin),
) -> list[PendingRegistrationItem]:
    try:
        accounts = await registrations.list_pending()
        logger.info(f"Admin {admin.id} listed {len(accounts)} pending registrations")
        return [PendingRegistrationItem.model_validate(account) for account in accounts]

    except AccountServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error fetching pending registrations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
            },
        ) from e


async def _confirm(
    user_id: int,
    registrations: RegistrationService,
    admin: CurrentAccount,
) -> ConfirmRegistrationResponse:
    limit, window = RATE_LIMIT_APPROVE
    await enforce_rate_limit(f"admin:approve:{admin.id}", limit, window)

    try:
        passcode = await registrations.approve(user_id)
        logger.info(f"Admin {admin.id} approved account {user_id}")

        return ConfirmRegistrationResponse(
            message="Registration confirmed successfully. Passcode sent to student email.",
            passcode=passcode if settings.passcode_visible_in_response else None,
        )

    except AccountServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error confirming registration {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
            },
        ) from e


@router.post(
    "/confirm-registration",
    response_model=ConfirmRegistrationResponse,
    response_model_exclude_none=True,
    summary="Approve Registration",
    responses={
        404: {"description": "No pending registration with this id"},
        429: {"description": "Approval rate limit exceeded"},
    },
)
async def confirm_registration(
    data: ConfirmRegistrationRequest,
    registrations: RegistrationService = Depends(get_registration_service),
    admin: CurrentAccount = Depends(get_current_admin),
) -> ConfirmRegistrationResponse:
    return await _confirm(data.user_id, registrations, admin)


@router.post(
    "/confirm-registration/{user_id}",
    response_model=ConfirmRegistrationResponse,
    response_model_exclude_none=True,
    summary="Approve Registration By Id",
    responses={
        404: {"description": "No pending registration with this id"},
        429: {"description": "Approval rate limit exceeded"},
    },
)
async def confirm_registration_by_id(
    user_id: int = Path(..., gt=0),
    registrations: RegistrationService = Depends(get_registration_service),
    admin: CurrentAccount = Depends(get_current_admin),
) -> ConfirmRegistrationResponse:
    return await _confirm(user_id, registrations, admin)
