"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    ClkkError,
    ExternalServiceError,
    ValidationError,
)

from .models import ProviderErrorCode


class IdentityProviderError(ExternalServiceError):
    """
    Raised by identity provider adapters.

    ``provider_code`` is the closed error category; ``raw_code`` keeps the
    provider's own code for diagnostics only.
    """

    def __init__(
        self,
        provider_code: ProviderErrorCode,
        raw_code: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"Identity provider error: {provider_code.value}",
            service="identity_provider",
            code=provider_code.value.upper(),
            details={"raw_code": raw_code} if raw_code else {},
        )
        self.provider_code = provider_code
        self.raw_code = raw_code


class SignupValidationError(ValidationError):
    """Raised when the signup form fails local validation."""

    def __init__(self, field_errors: dict[str, str]):
        super().__init__(
            "Signup form is invalid",
            code="SIGNUP_VALIDATION_FAILED",
            details={"field_errors": field_errors},
        )
        self.field_errors = field_errors


class SignupFailedError(AuthenticationError):
    """Raised when the provider rejects account creation."""

    def __init__(self, category: ProviderErrorCode, user_message: str):
        super().__init__(
            user_message,
            code="SIGNUP_FAILED",
            details={"category": category.value},
        )
        self.category = category


class SignInFailedError(AuthenticationError):
    """Raised when the provider rejects a sign-in."""

    def __init__(self, category: ProviderErrorCode, user_message: str):
        super().__init__(
            user_message,
            code="SIGN_IN_FAILED",
            details={"category": category.value},
        )
        self.category = category


class SessionRequiredError(AuthenticationError):
    """Raised when a guarded view is requested without a session."""

    def __init__(self, redirect_to: str):
        super().__init__(
            "A signed-in session is required",
            code="SESSION_REQUIRED",
            details={"redirect_to": redirect_to},
        )
        self.redirect_to = redirect_to


class SessionPendingError(ClkkError):
    """Raised when a guarded view is requested while the session is still resolving."""

    def __init__(self):
        super().__init__("Session is still loading", code="SESSION_PENDING")
