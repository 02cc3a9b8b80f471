"""
Registration Schemas

Pydantic schemas for request validation and response serialization.
Field names on the wire are camelCase (regNumber, userId, createdAt).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Accepts either the camelCase alias or the field name."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class SignupRequest(CamelModel):
    """Request body for POST /signup.

    Format checks happen in the service so every failure carries a field-level
    INVALID_INPUT message rather than a generic validation error.
    """

    name: str = Field(..., max_length=200)
    reg_number: str = Field(..., alias="regNumber", max_length=20)
    email: str = Field(..., max_length=255)


class SignupResponse(CamelModel):
    success: bool = True
    user_id: int = Field(..., alias="userId")
    message: str = "Registration submitted successfully. Awaiting admin approval."


class PendingRegistrationItem(CamelModel):
    """One row in the admin's pending list."""

    id: int
    name: str
    reg_number: str = Field(..., alias="regNumber")
    email: str
    created_at: datetime = Field(..., alias="createdAt")


class ConfirmRegistrationRequest(CamelModel):
    """Request body for POST /confirm-registration."""

    user_id: int = Field(..., alias="userId", gt=0)


class ConfirmRegistrationResponse(CamelModel):
    success: bool = True
    message: str
    # Only populated for demo deployments outside production
    passcode: str | None = None
