"""
Account Repository

Durable storage for Account records.

Design Principles:
- Uniqueness of reg_number and email is enforced by the table's unique
  constraints; a concurrent duplicate insert surfaces as DuplicateKeyError.
- State changes are conditional UPDATEs (WHERE status = ...), never
  read-then-write, so two racing approvals cannot both succeed.
- Every call is bounded by a timeout; driver failures and timeouts surface
  as StoreError.
- Each mutating call commits its own transaction.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infosys.core.config import settings

from .models import Account, AccountRole, AccountStatus

logger = logging.getLogger(__name__)


def normalize_key(value: str) -> str:
    """Normalize a reg number or email for storage and comparison."""
    return value.strip().lower()


class DuplicateKeyError(ValueError):
    """Raised when an insert collides with an existing reg_number or email."""

    def __init__(self, field: str | None = None):
        self.field = field
        super().__init__(f"Duplicate key on {field or 'unique field'}")


class RecordNotFoundError(LookupError):
    """Raised when no account matches the id and required status."""

    def __init__(self, account_id: int, required_status: AccountStatus):
        self.account_id = account_id
        self.required_status = required_status
        super().__init__(f"No {required_status.value} account with id {account_id}")


class StoreError(RuntimeError):
    """Raised when the database fails or does not answer within the timeout."""


def _duplicate_field(error: IntegrityError) -> str | None:
    detail = str(error.orig).lower()
    if "reg_number" in detail:
        return "reg_number"
    if "email" in detail:
        return "email"
    return None


class AccountRepository:
    """Repository for account database operations, bound to one session."""

    def __init__(self, session: AsyncSession, timeout_seconds: float | None = None):
        self.session = session
        self.timeout_seconds = timeout_seconds or settings.store_timeout_seconds

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        """Bound an operation by the store timeout and translate driver errors."""
        try:
            async with asyncio.timeout(self.timeout_seconds):
                yield
        except IntegrityError:
            await self.session.rollback()
            raise
        except TimeoutError as e:
            logger.error(f"Account store timed out during {operation}")
            await self.session.rollback()
            raise StoreError(f"{operation} timed out after {self.timeout_seconds}s") from e
        except SQLAlchemyError as e:
            logger.error(f"Account store failure during {operation}: {e}")
            await self.session.rollback()
            raise StoreError(f"{operation} failed") from e

    async def insert_pending(self, *, name: str, reg_number: str, email: str) -> Account:
        """
        Create a pending account with no passcode.

        Raises:
            DuplicateKeyError: If reg_number or email is already registered
            StoreError: On database failure or timeout
        """
        account = Account(
            name=name.strip(),
            reg_number=normalize_key(reg_number),
            email=normalize_key(email),
            role=AccountRole.STUDENT,
            status=AccountStatus.PENDING,
            passcode_hash=None,
        )
        try:
            async with self._guard("insert_pending"):
                self.session.add(account)
                await self.session.commit()
                await self.session.refresh(account)
        except IntegrityError as e:
            field = _duplicate_field(e)
            logger.warning(f"Duplicate signup rejected on {field or 'unknown field'}")
            raise DuplicateKeyError(field) from e

        logger.info(f"Created pending account {account.id}")
        return account

    async def insert_admin(
        self, *, name: str, reg_number: str, email: str, passcode_hash: str
    ) -> Account:
        """Create an active admin account (bootstrap seed only)."""
        account = Account(
            name=name.strip(),
            reg_number=normalize_key(reg_number),
            email=normalize_key(email),
            role=AccountRole.ADMIN,
            status=AccountStatus.ACTIVE,
            passcode_hash=passcode_hash,
        )
        try:
            async with self._guard("insert_admin"):
                self.session.add(account)
                await self.session.commit()
                await self.session.refresh(account)
        except IntegrityError as e:
            raise DuplicateKeyError(_duplicate_field(e)) from e

        logger.info(f"Created admin account {account.id}")
        return account

    async def get_by_id(self, account_id: int) -> Account | None:
        async with self._guard("get_by_id"):
            return await self.session.get(Account, account_id, populate_existing=True)

    async def find_by_reg_number(self, reg_number: str) -> Account | None:
        """Case-insensitive lookup by registration number."""
        async with self._guard("find_by_reg_number"):
            result = await self.session.execute(
                select(Account).where(Account.reg_number == normalize_key(reg_number))
            )
            return result.scalar_one_or_none()

    async def list_by_status(self, status: AccountStatus) -> list[Account]:
        """Accounts in the given status, newest first."""
        async with self._guard("list_by_status"):
            result = await self.session.execute(
                select(Account)
                .where(Account.status == status)
                .order_by(Account.created_at.desc(), Account.id.desc())
            )
            return list(result.scalars().all())

    async def find_admin(self) -> Account | None:
        async with self._guard("find_admin"):
            result = await self.session.execute(
                select(Account).where(Account.role == AccountRole.ADMIN).limit(1)
            )
            return result.scalar_one_or_none()

    async def set_approved(self, account_id: int, passcode_hash: str) -> None:
        """
        Activate a pending account and store its passcode hash.

        The status check and the write are one statement, so of two
        concurrent calls for the same account only one updates a row.

        Raises:
            RecordNotFoundError: If no pending account has this id
            StoreError: On database failure or timeout
        """
        async with self._guard("set_approved"):
            result = await self.session.execute(
                update(Account)
                .where(Account.id == account_id, Account.status == AccountStatus.PENDING)
                .values(
                    status=AccountStatus.ACTIVE,
                    passcode_hash=passcode_hash,
                    updated_at=func.now(),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                # Nothing written. Commit so instances already loaded stay unexpired.
                await self.session.commit()
                raise RecordNotFoundError(account_id, AccountStatus.PENDING)
            await self.session.commit()

        logger.info(f"Account {account_id} approved")

    async def update_passcode_hash(self, account_id: int, passcode_hash: str) -> None:
        """
        Replace the passcode hash of an active account.

        Raises:
            RecordNotFoundError: If no active account has this id
            StoreError: On database failure or timeout
        """
        async with self._guard("update_passcode_hash"):
            result = await self.session.execute(
                update(Account)
                .where(Account.id == account_id, Account.status == AccountStatus.ACTIVE)
                .values(passcode_hash=passcode_hash, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self.session.commit()
                raise RecordNotFoundError(account_id, AccountStatus.ACTIVE)
            await self.session.commit()

        logger.info(f"Passcode updated for account {account_id}")
