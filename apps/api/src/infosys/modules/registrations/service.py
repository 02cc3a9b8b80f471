"""
Registration Lifecycle Service

Business logic for student self-registration and admin approval.

This module implements:
1. Sign-up Flow:
   - Validate name, registration number and email before touching the store
   - Create a pending account (no passcode)
   - Notify the department admin (best effort)

2. Approval Flow:
   - Generate a one-time passcode from a CSPRNG
   - Hash it with bcrypt in a worker thread
   - Activate the account with a single conditional update
   - Email the passcode to the student (best effort)

Security considerations:
- The plaintext passcode is returned to the immediate caller only and is
  never stored or logged
- Uniqueness is enforced by the store, so racing sign-ups cannot both succeed
- Notification failures never roll back an approval
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from infosys.core.email import send_admin_registration_notice, send_passcode_email
from infosys.core.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    StoreUnavailableError,
)
from infosys.core.security import hash_password
from infosys.modules.accounts import (
    Account,
    AccountRepository,
    AccountStatus,
    DuplicateKeyError,
    RecordNotFoundError,
    StoreError,
)
from infosys.modules.registrations.helpers import generate_passcode, validate_signup_fields

logger = logging.getLogger(__name__)

# (to_email, student_name, reg_number, passcode) -> delivered
PasscodeNotifier = Callable[[str, str, str, str], Awaitable[bool]]
# (student_name, reg_number, student_email) -> delivered
AdminNotifier = Callable[[str, str, str], Awaitable[bool]]


class RegistrationService:
    """Pending -> active lifecycle for student accounts."""

    def __init__(
        self,
        repository: AccountRepository,
        notifier: PasscodeNotifier = send_passcode_email,
        admin_notifier: AdminNotifier | None = send_admin_registration_notice,
    ):
        self.repository = repository
        self.notifier = notifier
        self.admin_notifier = admin_notifier

    async def sign_up(self, name: str, reg_number: str, email: str) -> int:
        """
        Register a student as pending approval.

        Returns:
            The new account id

        Raises:
            InvalidInputError: If a field is empty or malformed
            AccountAlreadyExistsError: If the reg number or email is taken
            StoreUnavailableError: On store failure or timeout
        """
        validate_signup_fields(name, reg_number, email)

        try:
            account = await self.repository.insert_pending(
                name=name, reg_number=reg_number, email=email
            )
        except DuplicateKeyError as e:
            raise AccountAlreadyExistsError() from e
        except StoreError as e:
            raise StoreUnavailableError() from e

        logger.info(f"New registration pending approval: account {account.id}")

        if self.admin_notifier is not None:
            try:
                await self.admin_notifier(account.name, account.reg_number, account.email)
            except Exception as e:
                logger.error(f"Admin notification failed for account {account.id}: {e}")

        return account.id

    async def list_pending(self) -> list[Account]:
        """Pending accounts, newest first."""
        try:
            return await self.repository.list_by_status(AccountStatus.PENDING)
        except StoreError as e:
            raise StoreUnavailableError() from e

    async def approve(self, account_id: int) -> str:
        """
        Activate a pending account and issue its passcode.

        Only one of several concurrent approvals for the same account
        succeeds; the others raise AccountNotFoundError.

        Returns:
            The plaintext passcode

        Raises:
            AccountNotFoundError: If no pending account has this id
            StoreUnavailableError: On store failure or timeout
        """
        try:
            account = await self.repository.get_by_id(account_id)
        except StoreError as e:
            raise StoreUnavailableError() from e

        if account is None or account.status != AccountStatus.PENDING:
            raise AccountNotFoundError(account_id, AccountStatus.PENDING.value)

        passcode = generate_passcode()
        passcode_hash = await asyncio.to_thread(hash_password, passcode)

        try:
            await self.repository.set_approved(account_id, passcode_hash)
        except RecordNotFoundError as e:
            logger.warning(f"Account {account_id} was no longer pending at approval time")
            raise AccountNotFoundError(account_id, e.required_status.value) from e
        except StoreError as e:
            raise StoreUnavailableError() from e

        logger.info(f"Registration approved for account {account_id}")

        try:
            delivered = await self.notifier(
                account.email, account.name, account.reg_number, passcode
            )
            if not delivered:
                logger.warning(f"Passcode email for account {account_id} was not delivered")
        except Exception as e:
            logger.error(f"Passcode email failed for account {account_id}: {e}")

        return passcode
