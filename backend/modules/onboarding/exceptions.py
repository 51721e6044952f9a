"""
Onboarding module exceptions.

Both provisioning failures are retryable: the writes are idempotent.
"""

from typing import Optional

from shared.exceptions import ClkkError, ExternalServiceError, ValidationError

REGISTRATION_FAILED_MESSAGE = "Failed to complete registration. Please try again."


class DocumentWriteError(ExternalServiceError):
    """Raised by document store adapters when an upsert fails."""

    def __init__(self, collection: str, key: str, reason: Optional[str] = None):
        super().__init__(
            f"Failed to write {collection}/{key}" + (f": {reason}" if reason else ""),
            service="document_store",
            code="DOCUMENT_WRITE_FAILED",
            details={"collection": collection, "key": key},
        )
        self.collection = collection
        self.key = key


class ProvisioningError(ClkkError):
    """Base exception for onboarding provisioning failures."""

    def __init__(self, user_id: str, step: str, code: str, reason: Optional[str] = None):
        super().__init__(
            REGISTRATION_FAILED_MESSAGE,
            code=code,
            details={"user_id": user_id, "step": step},
        )
        self.user_id = user_id
        self.step = step
        self.reason = reason


class ProfileWriteFailedError(ProvisioningError):
    """Raised when the profile record could not be written."""

    def __init__(self, user_id: str, reason: Optional[str] = None):
        super().__init__(user_id, step="profile", code="PROFILE_WRITE_FAILED", reason=reason)


class WaitlistWriteFailedError(ProvisioningError):
    """Raised when the waitlist entry could not be written."""

    def __init__(self, user_id: str, reason: Optional[str] = None):
        super().__init__(user_id, step="waitlist", code="WAITLIST_WRITE_FAILED", reason=reason)


class IdentityNotVerifiedError(ValidationError):
    """Raised when onboarding is asked to run for an unverified identity."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Identity {user_id} has not verified its email",
            code="IDENTITY_NOT_VERIFIED",
            details={"user_id": user_id},
        )
