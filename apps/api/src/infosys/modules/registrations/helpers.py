"""
Registration Helpers

Input validation and passcode generation shared by the registration service
and the admin seeding script.
"""

import re
import secrets
import string

from email_validator import EmailNotValidError, validate_email

from infosys.core.config import settings
from infosys.core.exceptions import InvalidInputError

PASSCODE_ALPHABET = string.ascii_letters + string.digits

REG_NUMBER_EXAMPLE = "24/is/co/346"


def generate_passcode(length: int | None = None) -> str:
    """
    Generate a one-time passcode from [A-Za-z0-9] using a CSPRNG.

    Args:
        length: Number of characters (defaults to settings.passcode_length)
    """
    length = length or settings.passcode_length
    return "".join(secrets.choice(PASSCODE_ALPHABET) for _ in range(length))


def is_valid_reg_number(reg_number: str) -> bool:
    """Match against the configured registration number pattern, ignoring case."""
    flags = re.IGNORECASE | re.ASCII
    return re.fullmatch(settings.reg_number_pattern, reg_number.strip(), flags) is not None


def is_valid_email(email: str) -> bool:
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False

    if settings.allowed_email_domain:
        domain = email.strip().rsplit("@", 1)[-1].lower()
        return domain == settings.allowed_email_domain.lower()
    return True


def validate_signup_fields(name: str, reg_number: str, email: str) -> None:
    """
    Validate signup input before it reaches the store.

    Raises:
        InvalidInputError: naming the first offending field
    """
    if not name or not name.strip():
        raise InvalidInputError("name", "Name is required")
    if not reg_number or not reg_number.strip():
        raise InvalidInputError("regNumber", "Registration number is required")
    if not email or not email.strip():
        raise InvalidInputError("email", "Email is required")

    if not is_valid_reg_number(reg_number):
        raise InvalidInputError(
            "regNumber",
            f"Registration number must follow format: YY/dept/code/XXX (e.g., {REG_NUMBER_EXAMPLE})",
        )

    if not is_valid_email(email):
        if settings.allowed_email_domain:
            message = f"Email must be a valid @{settings.allowed_email_domain} address"
        else:
            message = "Please provide a valid email address"
        raise InvalidInputError("email", message)
