"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from src.domain.passwords import MAX_PASSWORD_BYTES
from src.domain.ports import Gender, Role

_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "Password must contain a lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain an uppercase letter"),
    (re.compile(r"\d"), "Password must contain a digit"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain a symbol"),
)


def _check_strong_password(value: str) -> str:
    if len(value.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(value):
            raise ValueError(message)
    return value


# bcrypt refuses input over 72 bytes; multi-byte characters count in full
StrongPassword = Annotated[
    str,
    Field(min_length=8, max_length=72, examples=["Test123!"]),
    AfterValidator(_check_strong_password),
]

Name = Annotated[str, Field(min_length=1, max_length=100)]


class CreateAccountRequest(BaseModel):
    """Request model for account creation."""

    first_name: Name = Field(..., examples=["Ada"])
    family_name: Name = Field(..., examples=["Lovelace"])
    email: EmailStr
    password: StrongPassword
    confirm_password: StrongPassword
    gender: Gender
    role: Role


class UpdateAccountRequest(BaseModel):
    """Request model for profile update. Omitted fields stay unchanged."""

    first_name: Name | None = None
    family_name: Name | None = None
    gender: Gender | None = None


class ChangePasswordRequest(BaseModel):
    """Request model for password change."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: StrongPassword = Field(..., alias="currentPassword")
    new_password: StrongPassword = Field(..., alias="newPassword")
    confirm_new_password: StrongPassword = Field(..., alias="confirmNewPassword")


class AccountResponse(BaseModel):
    """Public account projection. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    family_name: str
    email: str
    gender: Gender
    role: Role


class AccountListResponse(BaseModel):
    """Response model for the account listing."""

    users: list[AccountResponse]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    message: list[str] = Field(..., examples=[["User with id 1 not found"]])
    error: str = Field(..., examples=["Not Found"])
    status: int = Field(..., examples=[404])
