"""
Authentication Service

Passcode login, passcode change, and the bootstrap admin account.

Every login failure (unknown registration number, account still pending,
wrong passcode) raises the same InvalidCredentialsError, and each path
performs one bcrypt comparison so response times do not reveal which one
occurred.
"""

import asyncio
import logging
from functools import lru_cache

from infosys.core.config import settings
from infosys.core.exceptions import (
    AccountNotFoundError,
    InvalidCredentialsError,
    InvalidInputError,
    StoreUnavailableError,
    WeakSecretError,
)
from infosys.core.security import BCRYPT_MAX_BYTES, hash_password, verify_password
from infosys.modules.accounts import (
    Account,
    AccountRepository,
    AccountStatus,
    DuplicateKeyError,
    RecordNotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """A hash no passcode is expected to match, compared against when there is no real one."""
    return hash_password("not-a-real-passcode", rounds=rounds)


def _verify_against_dummy(passcode: str) -> bool:
    return verify_password(passcode, _dummy_hash(settings.bcrypt_rounds))


class AuthService:
    """Credential checks against the account store."""

    def __init__(self, repository: AccountRepository):
        self.repository = repository

    async def _get_account(self, account_id: int) -> Account | None:
        try:
            return await self.repository.get_by_id(account_id)
        except StoreError as e:
            raise StoreUnavailableError() from e

    async def login(self, reg_number: str, passcode: str) -> Account:
        """
        Authenticate by registration number and passcode.

        Returns:
            The active account (id and role identify the session)

        Raises:
            InvalidCredentialsError: For any unknown, pending or mismatched login
            StoreUnavailableError: On store failure or timeout
        """
        try:
            account = await self.repository.find_by_reg_number(reg_number)
        except StoreError as e:
            raise StoreUnavailableError() from e

        if account is None or account.status != AccountStatus.ACTIVE:
            await asyncio.to_thread(_verify_against_dummy, passcode)
            logger.warning("Login rejected: no active account for the supplied registration number")
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(verify_password, passcode, account.passcode_hash):
            logger.warning(f"Login rejected: wrong passcode for account {account.id}")
            raise InvalidCredentialsError()

        logger.info(f"Account {account.id} logged in (role: {account.role.value})")
        return account

    async def change_secret(self, account_id: int, current_passcode: str, new_passcode: str) -> None:
        """
        Replace an active account's passcode.

        Raises:
            InvalidCredentialsError: If the current passcode does not match
            WeakSecretError: If the new passcode is shorter than the minimum
            InvalidInputError: If the new passcode is longer than bcrypt can hash
            AccountNotFoundError: If the account stopped being active mid-change
            StoreUnavailableError: On store failure or timeout
        """
        account = await self._get_account(account_id)
        stored_hash = account.passcode_hash if account is not None else None

        if not await asyncio.to_thread(verify_password, current_passcode, stored_hash):
            logger.warning(f"Passcode change rejected for account {account_id}: wrong current passcode")
            raise InvalidCredentialsError()

        if len(new_passcode) < settings.min_passcode_length:
            raise WeakSecretError(settings.min_passcode_length)

        if len(new_passcode.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise InvalidInputError(
                "newPasscode", f"New passcode must be at most {BCRYPT_MAX_BYTES} bytes long"
            )

        new_hash = await asyncio.to_thread(hash_password, new_passcode)

        try:
            await self.repository.update_passcode_hash(account_id, new_hash)
        except RecordNotFoundError as e:
            raise AccountNotFoundError(account_id, e.required_status.value) from e
        except StoreError as e:
            raise StoreUnavailableError() from e

        logger.info(f"Passcode changed for account {account_id}")


async def ensure_admin_account(repository: AccountRepository) -> Account:
    """
    Create the department admin account if none exists.

    Safe to call from several processes at once: the loser of a racing
    insert picks up the winner's row.
    """
    existing = await repository.find_admin()
    if existing is not None:
        return existing

    if settings.is_production and settings.admin_passcode == "admin123":
        logger.warning("SECURITY: seeding the admin with the default passcode; set ADMIN_PASSCODE")

    passcode_hash = await asyncio.to_thread(hash_password, settings.admin_passcode)
    try:
        admin = await repository.insert_admin(
            name=settings.admin_name,
            reg_number=settings.admin_reg_number,
            email=settings.admin_email,
            passcode_hash=passcode_hash,
        )
    except DuplicateKeyError:
        admin = await repository.find_admin()
        if admin is None:
            raise
        return admin

    logger.info(f"Seeded admin account {admin.id} ({admin.reg_number})")
    return admin
