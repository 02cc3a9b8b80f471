"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Login request schema."""

    model_config = ConfigDict(populate_by_name=True)

    reg_number: str = Field(..., alias="regNumber", min_length=1, max_length=20)
    passcode: str = Field(..., min_length=1, max_length=128)


class AccountResponse(BaseModel):
    """Account summary returned with a successful login."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    reg_number: str = Field(..., alias="regNumber")
    email: str
    role: str


class LoginResponse(BaseModel):
    """Login response schema."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Login successful"
    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    token_type: str = Field("bearer", alias="tokenType")
    user: AccountResponse


class ChangePasscodeRequest(BaseModel):
    """Length rules for the new passcode are enforced by the service."""

    model_config = ConfigDict(populate_by_name=True)

    current_passcode: str = Field(..., alias="currentPasscode", min_length=1, max_length=128)
    new_passcode: str = Field(..., alias="newPasscode", max_length=128)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
