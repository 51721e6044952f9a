"""
Signup flow.

Validates the account-creation form locally, then hands it to the
session store. Provider failures come back as one user-facing message
per known category.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from shared.models import Identity

from .exceptions import (
    IdentityProviderError,
    SignInFailedError,
    SignupFailedError,
    SignupValidationError,
)
from .interfaces import ISessionStore
from .models import (
    MIN_PASSWORD_LENGTH,
    PASSWORD_MISMATCH_MESSAGE,
    ProviderErrorCode,
    SignInRequest,
    SignupRequest,
)

logger = logging.getLogger(__name__)

SIGNUP_FAILED_MESSAGE = "Failed to create an account."
SIGN_IN_FAILED_MESSAGE = "Failed to sign in."

SIGNUP_ERROR_MESSAGES: dict[ProviderErrorCode, str] = {
    ProviderErrorCode.EMAIL_IN_USE: "This email is already registered.",
    ProviderErrorCode.INVALID_EMAIL: "Invalid email address.",
    ProviderErrorCode.OPERATION_NOT_ALLOWED: (
        "Email/password accounts are not enabled. Please contact support."
    ),
    ProviderErrorCode.WEAK_PASSWORD: "Password is too weak. Please use a stronger password.",
}

SIGN_IN_ERROR_MESSAGES: dict[ProviderErrorCode, str] = {
    ProviderErrorCode.INVALID_CREDENTIALS: "Invalid email or password.",
    ProviderErrorCode.EMAIL_NOT_CONFIRMED: "Please verify your email before signing in.",
    ProviderErrorCode.INVALID_EMAIL: "Invalid email address.",
}

# Messages shown next to a field, whatever pydantic's own wording is
FIELD_MESSAGES: dict[str, str] = {
    "email": "Invalid email address",
    "password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
}

SIGN_IN_FIELD_MESSAGES: dict[str, str] = {
    "email": "Invalid email address",
    "password": "Password is required",
}


def field_errors_from(
    error: PydanticValidationError,
    messages: Optional[dict[str, str]] = None,
) -> dict[str, str]:
    """Collapse pydantic errors into one message per form field."""
    messages = FIELD_MESSAGES if messages is None else messages
    field_errors: dict[str, str] = {}
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else "__root__"
        if field in field_errors:
            continue
        if item["type"] == "missing":
            field_errors[field] = "This field is required"
        else:
            field_errors[field] = messages.get(field, item["msg"])
    return field_errors


class SignupService:
    """
    Account creation and sign-in on top of the session store.

    Only the store talks to the identity provider; this service owns the
    form rules and the user-facing error wording.
    """

    def __init__(self, store: ISessionStore):
        self._store = store

    @staticmethod
    def validate(email: str, password: str, confirm_password: str) -> SignupRequest:
        """
        Validate the signup form without any network call.

        Raises:
            SignupValidationError: With one message per offending field;
                a mismatch is always reported on confirm_password, even
                when the password fails its own checks.
        """
        try:
            return SignupRequest(
                email=email,
                password=password,
                confirm_password=confirm_password,
            )
        except PydanticValidationError as e:
            field_errors = field_errors_from(e)
            # the model compares the two only once password passed its own checks
            if password != confirm_password:
                field_errors.setdefault("confirm_password", PASSWORD_MISMATCH_MESSAGE)
            raise SignupValidationError(field_errors) from None

    async def submit(self, email: str, password: str, confirm_password: str) -> Identity:
        """
        Create a new, unverified account and make it the current session.

        Returns:
            The new Identity (email_verified is False)

        Raises:
            SignupValidationError: Form invalid, provider not called
            SignupFailedError: Provider rejected the account
        """
        request = self.validate(email, password, confirm_password)

        try:
            return await self._store.sign_up(request.email, request.password)
        except IdentityProviderError as e:
            message = SIGNUP_ERROR_MESSAGES.get(e.provider_code)
            if message is None:
                logger.error(
                    "Signup failed with unrecognized provider error %s: %s",
                    e.raw_code,
                    e.message,
                )
                raise SignupFailedError(ProviderErrorCode.UNKNOWN, SIGNUP_FAILED_MESSAGE) from e
            logger.info("Signup rejected: %s", e.provider_code.value)
            raise SignupFailedError(e.provider_code, message) from e

    async def sign_in(self, email: str, password: str) -> Identity:
        """
        Sign in an existing account.

        Raises:
            SignupValidationError: Form invalid, provider not called
            SignInFailedError: Provider rejected the credentials
        """
        try:
            request = SignInRequest(email=email, password=password)
        except PydanticValidationError as e:
            raise SignupValidationError(field_errors_from(e, SIGN_IN_FIELD_MESSAGES)) from None

        try:
            return await self._store.sign_in(request.email, request.password)
        except IdentityProviderError as e:
            message = SIGN_IN_ERROR_MESSAGES.get(e.provider_code)
            if message is None:
                logger.error(
                    "Sign-in failed with unrecognized provider error %s: %s",
                    e.raw_code,
                    e.message,
                )
                raise SignInFailedError(ProviderErrorCode.UNKNOWN, SIGN_IN_FAILED_MESSAGE) from e
            raise SignInFailedError(e.provider_code, message) from e
