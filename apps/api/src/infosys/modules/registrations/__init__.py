"""
Registrations module - student sign-up and admin approval.
"""

from infosys.modules.registrations.service import RegistrationService

__all__ = ["RegistrationService"]
