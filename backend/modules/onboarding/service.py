"""
Onboarding completer.

Provisions the records that make a verified identity a usable account.
There is no "already onboarded" flag: both writes are keyed full
replacements, so running the sequence again is correct, not harmful.
"""

import logging

from shared.models import Identity

from .exceptions import (
    DocumentWriteError,
    IdentityNotVerifiedError,
    ProfileWriteFailedError,
    WaitlistWriteFailedError,
)
from .interfaces import IDocumentStore, IOnboardingService
from .models import USERS_COLLECTION, WAITLIST_COLLECTION, ProfileRecord, WaitlistEntry

logger = logging.getLogger(__name__)


class OnboardingService(IOnboardingService):
    """
    Writes the profile record, then the waitlist entry.

    Stops at the first failure. A profile written before a failed
    waitlist write is left in place.
    """

    def __init__(self, documents: IDocumentStore):
        self._documents = documents

    async def complete(self, identity: Identity) -> None:
        if not identity.email_verified:
            raise IdentityNotVerifiedError(identity.id)

        profile = ProfileRecord.for_identity(identity)
        try:
            await self._documents.upsert(USERS_COLLECTION, identity.id, profile.to_document())
        except DocumentWriteError as e:
            logger.error("Error creating user document for %s: %s", identity.id, e.message)
            raise ProfileWriteFailedError(identity.id, e.message) from e

        entry = WaitlistEntry.for_identity(identity)
        try:
            await self._documents.upsert(WAITLIST_COLLECTION, identity.id, entry.to_document())
        except DocumentWriteError as e:
            logger.error("Error adding %s to waitlist: %s", identity.id, e.message)
            raise WaitlistWriteFailedError(identity.id, e.message) from e

        logger.info("Onboarding records written for %s", identity.id)
