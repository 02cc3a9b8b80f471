"""Authentication module."""

from infosys.modules.auth.service import AuthService, ensure_admin_account

__all__ = ["AuthService", "ensure_admin_account"]
