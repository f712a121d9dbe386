"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field aliases keep the camelCase wire names existing clients send.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

PASSWORD_MIN_LENGTH = 6


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_Request):
    """Request model for starting a registration."""

    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr
    login: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        ..., description="Unique login"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, description="User password (min 6 characters)"
    )


class ConfirmRegistrationRequest(_Request):
    """Request model for confirming a registration code."""

    email: EmailStr
    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit verification code")


class LoginRequest(_Request):
    """Request model for login by login or email."""

    login_or_email: str = Field(..., min_length=1, alias="loginOrEmail")
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(_Request):
    """Request model for changing the password of the current account."""

    old_password: str = Field(..., min_length=1, alias="oldPassword")
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, alias="newPassword")


class RequestResetRequest(_Request):
    """Request model for requesting a password reset code."""

    email: EmailStr


class VerifyResetCodeRequest(_Request):
    """Request model for exchanging a reset code for a reset token."""

    email: EmailStr
    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit reset code")


class ResetPasswordRequest(_Request):
    """Request model for setting a new password with a reset token."""

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, alias="newPassword")


class AccountData(BaseModel):
    """Account fields returned to callers. Never includes the password hash."""

    id: int
    email: str
    login: str
    name: str


class StatusResponse(BaseModel):
    """Generic status response."""

    status: bool = True
    message: str


class RegisteredUser(AccountData):
    token: str


class RegisteredResponse(BaseModel):
    """Response model for a confirmed registration."""

    message: str
    user: RegisteredUser


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    status: bool = True
    token: str
    data: AccountData


class ResetTokenResponse(StatusResponse):
    """Response model for an issued reset token."""

    token: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    status: bool = False
    message: str
