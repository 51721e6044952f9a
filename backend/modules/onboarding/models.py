"""
Onboarding module data models.

Records written once an identity is verified, and the poller's states.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, Field

from shared.models import Identity

USERS_COLLECTION = "users"
WAITLIST_COLLECTION = "waitinglist"


class ServerValue(str, Enum):
    """Placeholders the document store resolves at write time."""

    # Postgres parses the 'now' literal as the transaction timestamp
    TIMESTAMP = "now"


SERVER_TIMESTAMP = ServerValue.TIMESTAMP

Timestamp = Union[datetime, ServerValue]


class WaitlistStatus(str, Enum):
    VERIFIED = "verified"


class ProfileRecord(BaseModel):
    """
    Profile document in the ``users`` collection, keyed by uid.

    Written as a full replacement, so rewriting it is harmless.
    """

    uid: str = Field(..., description="Identity ID")
    email: Optional[str] = Field(None, description="Account email")
    email_verified: bool = Field(default=True, description="Verification flag at write time")
    created_at: Timestamp = Field(default=SERVER_TIMESTAMP)
    updated_at: Timestamp = Field(default=SERVER_TIMESTAMP)

    @classmethod
    def for_identity(cls, identity: Identity) -> "ProfileRecord":
        return cls(uid=identity.id, email=identity.email, email_verified=identity.email_verified)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class WaitlistEntry(BaseModel):
    """Waitlist document in the ``waitinglist`` collection, keyed by uid."""

    uid: str = Field(..., description="Identity ID")
    email: Optional[str] = Field(None, description="Account email")
    status: WaitlistStatus = Field(default=WaitlistStatus.VERIFIED)
    verified_at: Timestamp = Field(default=SERVER_TIMESTAMP)

    @classmethod
    def for_identity(cls, identity: Identity) -> "WaitlistEntry":
        return cls(uid=identity.id, email=identity.email)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class PollerState(str, Enum):
    """Verification poller states."""

    IDLE = "idle"  # no current identity
    WATCHING = "watching"  # polling for the verification flag
    VERIFIED = "verified"  # flag observed; onboarding not (yet) successful
    COMPLETED = "completed"  # onboarding done, moved on to the dashboard
