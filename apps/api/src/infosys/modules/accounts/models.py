"""
Account Models

The single credential table shared by students and the bootstrap admin.
"""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from infosys.core.database import Base


class AccountRole(str, enum.Enum):
    """Roles an account is created with. Fixed for the account's lifetime."""

    STUDENT = "student"
    ADMIN = "admin"


class AccountStatus(str, enum.Enum):
    """Approval state. PENDING -> ACTIVE is the only transition."""

    PENDING = "pending"
    ACTIVE = "active"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Account(Base):
    """
    Student or admin identity record.

    reg_number and email are stored lower-cased, so the unique constraints
    enforce case-insensitive uniqueness. passcode_hash is NULL exactly while
    the account is pending.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    reg_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    passcode_hash: Mapped[str | None] = mapped_column(Text, nullable=True)

    role: Mapped[AccountRole] = mapped_column(
        Enum(AccountRole, name="account_role", values_callable=_enum_values),
        nullable=False,
        default=AccountRole.STUDENT,
    )
    status: Mapped[AccountStatus] = mapped_column(
        Enum(AccountStatus, name="account_status", values_callable=_enum_values),
        nullable=False,
        default=AccountStatus.PENDING,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "(status = 'pending' AND passcode_hash IS NULL) "
            "OR (status = 'active' AND passcode_hash IS NOT NULL)",
            name="ck_accounts_passcode_matches_status",
        ),
        Index("ix_accounts_status_created_at", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, reg_number={self.reg_number}, role={self.role.value})>"

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE
