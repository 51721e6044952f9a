"""
Onboarding module interfaces.

The poller depends on IOnboardingService; the service depends on
IDocumentStore, so provisioning can be tested without a database.
"""

from typing import Any, Protocol, runtime_checkable

from shared.models import Identity


@runtime_checkable
class IDocumentStore(Protocol):
    """Interface for the external document store."""

    async def upsert(self, collection: str, key: str, record: dict[str, Any]) -> None:
        """
        Write a record as a full replacement of whatever ``key`` held.

        Values equal to SERVER_TIMESTAMP are resolved by the store.

        Args:
            collection: Collection (table) name
            key: Record key (the identity id)
            record: Field values

        Raises:
            DocumentWriteError: If the write was not acknowledged
        """
        ...


@runtime_checkable
class IOnboardingService(Protocol):
    """Interface for post-verification provisioning."""

    async def complete(self, identity: Identity) -> None:
        """
        Provision the profile record and the waitlist entry.

        Safe to call more than once for the same identity.

        Raises:
            IdentityNotVerifiedError: Identity is not verified
            ProfileWriteFailedError: Step 1 failed, step 2 skipped
            WaitlistWriteFailedError: Step 2 failed, profile kept
        """
        ...
