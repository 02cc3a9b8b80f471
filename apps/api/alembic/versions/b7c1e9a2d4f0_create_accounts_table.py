"""create accounts table

Revision ID: b7c1e9a2d4f0
Revises:
Create Date: 2026-10-18 09:00:00.000000

This migration creates the accounts table holding students and the
department admin. Registration number and email are stored lower-cased,
so the unique constraints make both case-insensitively unique. The check
constraint keeps passcode_hash NULL exactly while an account is pending.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "b7c1e9a2d4f0"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the accounts table and its indexes."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("reg_number", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("passcode_hash", sa.Text(), nullable=True),
        sa.Column(
            "role",
            sa.Enum("student", "admin", name="account_role"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("pending", "active", name="account_status"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reg_number"),
        sa.UniqueConstraint("email"),
        sa.CheckConstraint(
            "(status = 'pending' AND passcode_hash IS NULL) "
            "OR (status = 'active' AND passcode_hash IS NOT NULL)",
            name="ck_accounts_passcode_matches_status",
        ),
    )
    op.create_index(
        "ix_accounts_status_created_at",
        "accounts",
        ["status", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Drop the accounts table."""
    op.drop_index("ix_accounts_status_created_at", table_name="accounts")
    op.drop_table("accounts")
    sa.Enum(name="account_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="account_role").drop(op.get_bind(), checkfirst=True)
