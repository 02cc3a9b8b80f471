"""
Accounts module - the credential store for students and the admin.
"""

from infosys.modules.accounts.models import Account, AccountRole, AccountStatus
from infosys.modules.accounts.repository import (
    AccountRepository,
    DuplicateKeyError,
    RecordNotFoundError,
    StoreError,
    normalize_key,
)

__all__ = [
    "Account",
    "AccountRole",
    "AccountStatus",
    "AccountRepository",
    "DuplicateKeyError",
    "RecordNotFoundError",
    "StoreError",
    "normalize_key",
]
