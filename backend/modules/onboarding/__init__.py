"""
Onboarding module.

Turns a verified identity into a provisioned account: the poller notices
the out-of-band verification, the service writes the profile record and
the waitlist entry.

Public API:
- IOnboardingService / IDocumentStore: Interfaces
- OnboardingService: Idempotent provisioning
- VerificationPoller: Background verification reconciliation
- ProfileRecord, WaitlistEntry, PollerState: Models
- Provisioning exceptions
"""

from .interfaces import IDocumentStore, IOnboardingService
from .models import (
    SERVER_TIMESTAMP,
    USERS_COLLECTION,
    WAITLIST_COLLECTION,
    PollerState,
    ProfileRecord,
    WaitlistEntry,
)
from .service import OnboardingService
from .poller import VerificationPoller
from .exceptions import (
    DocumentWriteError,
    ProvisioningError,
    ProfileWriteFailedError,
    WaitlistWriteFailedError,
    IdentityNotVerifiedError,
)

__all__ = [
    # Interfaces
    "IDocumentStore",
    "IOnboardingService",
    # Models
    "SERVER_TIMESTAMP",
    "USERS_COLLECTION",
    "WAITLIST_COLLECTION",
    "PollerState",
    "ProfileRecord",
    "WaitlistEntry",
    # Services
    "OnboardingService",
    "VerificationPoller",
    # Exceptions
    "DocumentWriteError",
    "ProvisioningError",
    "ProfileWriteFailedError",
    "WaitlistWriteFailedError",
    "IdentityNotVerifiedError",
]
