"""
Session store implementation.

Holds the process-wide current Identity and notifies subscribers
synchronously whenever it changes.
"""

import logging
from typing import Optional

from shared.models import Identity

from .exceptions import IdentityProviderError
from .interfaces import IIdentityProvider, ISessionStore, SessionListener, Unsubscribe
from .models import SessionState

logger = logging.getLogger(__name__)


class SessionStore(ISessionStore):
    """
    Single owned cell for the current session.

    The mutating operations are passthroughs to the identity provider.
    On success they swap the current Identity and notify every listener
    before returning, so a read right after an awaited call never sees
    the previous value.
    """

    def __init__(self, provider: IIdentityProvider):
        self._provider = provider
        self._identity: Optional[Identity] = None
        self._loading = True
        self._listeners: list[SessionListener] = []

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def state(self) -> SessionState:
        return SessionState(identity=self._identity, loading=self._loading)

    def get_current(self) -> Optional[Identity]:
        return self._identity

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def initialize(self) -> Optional[Identity]:
        """
        Resolve the persisted session once.

        Emits a single notification when loading ends. A failed restore
        leaves the visitor signed out.
        """
        if not self._loading:
            return self._identity

        try:
            identity = await self._provider.restore_session()
        except IdentityProviderError as e:
            logger.warning("Could not restore persisted session: %s", e.message)
            identity = None

        if not self._loading:
            # a sign-in or sign-up settled the session first
            return self._identity

        self._identity = identity
        self._loading = False
        self._notify()
        return identity

    async def sign_up(self, email: str, password: str) -> Identity:
        identity = await self._provider.create_account(email, password)
        self._replace(identity)
        logger.info("Created account %s (unverified)", identity.id)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        identity = await self._provider.sign_in(email, password)
        self._replace(identity)
        logger.info("Signed in %s", identity.id)
        return identity

    async def sign_out(self) -> None:
        await self._provider.sign_out()
        self._replace(None)
        logger.info("Signed out")

    async def refresh(self) -> Optional[Identity]:
        """
        Re-read the current identity from the provider.

        Returns the current identity afterwards. A result that arrives
        after the session was cleared or switched is dropped.
        """
        current = self._identity
        if current is None:
            return None

        fresh = await self._provider.refresh(current)

        latest = self._identity
        if latest is None or latest.id != current.id:
            logger.debug("Dropping refresh for %s: session changed meanwhile", current.id)
            return latest

        self._replace(latest.merged_with(fresh))
        return self._identity

    async def send_verification_email(self) -> bool:
        identity = self._identity
        if identity is None:
            return False
        await self._provider.send_verification_email(identity)
        logger.info("Verification email sent for %s", identity.id)
        return True

    def _replace(self, identity: Optional[Identity]) -> None:
        if not self._loading and identity == self._identity:
            return
        self._identity = identity
        self._loading = False
        self._notify()

    def _notify(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session listener %r failed", listener)
