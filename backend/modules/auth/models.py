"""
Authentication module data models.

These models define the session state, the closed set of provider
error codes, and the request shapes validated before any provider call.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from shared.models import Identity

MIN_PASSWORD_LENGTH = 6
PASSWORD_MISMATCH_MESSAGE = "Passwords don't match"


class ProviderErrorCode(str, Enum):
    """Identity provider failures, translated once at the adapter boundary."""

    EMAIL_IN_USE = "email_in_use"
    INVALID_EMAIL = "invalid_email"
    OPERATION_NOT_ALLOWED = "operation_not_allowed"
    WEAK_PASSWORD = "weak_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    UNKNOWN = "unknown"


class SessionState(BaseModel):
    """Snapshot handed to session listeners."""

    identity: Optional[Identity] = Field(None, description="Current identity, None when signed out")
    loading: bool = Field(default=False, description="Persisted session still resolving")

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


class SignupRequest(BaseModel):
    """
    Account-creation form.

    Validated locally; a failure here never reaches the identity provider.
    """

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="Account password")
    confirm_password: str = Field(..., description="Must repeat the password")

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        # password is missing from info.data when it failed its own checks
        password = info.data.get("password")
        if password is not None and value != password:
            raise PydanticCustomError("password_mismatch", PASSWORD_MISMATCH_MESSAGE)
        return value


class SignInRequest(BaseModel):
    """Sign-in form."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Account password")
