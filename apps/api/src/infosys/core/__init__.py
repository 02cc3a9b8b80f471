"""
Core module - settings, storage engine, credentials, errors and auth dependencies.
"""

from infosys.core.auth import CurrentAccount, get_current_account, get_current_admin
from infosys.core.config import get_settings, settings
from infosys.core.database import Base, close_db, get_db, init_db
from infosys.core.exceptions import AccountServiceError
from infosys.core.security import hash_password, verify_password

__all__ = [
    "settings",
    "get_settings",
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "AccountServiceError",
    "hash_password",
    "verify_password",
    "CurrentAccount",
    "get_current_account",
    "get_current_admin",
]
