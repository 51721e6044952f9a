"""
Verification poller.

Email verification happens out-of-band (a link clicked in another tab
or on another device), so nothing pushes the change to this process.
The poller re-reads the identity on a fixed interval and runs the
onboarding completer once the verification flag comes back true.

States:
    IDLE       no current identity, nothing scheduled
    WATCHING   identity present, refreshing every ``interval`` seconds
    VERIFIED   flag observed true; onboarding failed or is in flight
    COMPLETED  onboarding succeeded, navigated to the dashboard
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from modules.auth.exceptions import IdentityProviderError
from modules.auth.interfaces import ISessionStore, Unsubscribe
from modules.auth.models import SessionState
from modules.navigation.models import Route
from shared.models import Identity

from .exceptions import ProvisioningError
from .interfaces import IOnboardingService
from .models import PollerState

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 3.0  # seconds


class VerificationPoller:
    """
    Background reconciliation loop for the verification flag.

    One asyncio task runs the ticks back to back, so ticks never overlap.
    A manual retry may run while a tick waits on refresh, but only one
    onboarding attempt runs at a time.
    """

    def __init__(
        self,
        store: ISessionStore,
        onboarding: IOnboardingService,
        navigate: Callable[[Route], Any],
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self._store = store
        self._onboarding = onboarding
        self._navigate = navigate
        self._interval = interval

        self._state = PollerState.IDLE
        self._task: Optional[asyncio.Task] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._watched_id: Optional[str] = None
        self._in_flight = False
        self._last_error: Optional[ProvisioningError] = None

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def last_error(self) -> Optional[ProvisioningError]:
        return self._last_error

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def watched_id(self) -> Optional[str]:
        return self._watched_id

    def start(self) -> None:
        """
        Mount: begin watching the current identity.

        Must be called from within a running event loop. Calling it again
        while already watching the same identity changes nothing.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_session_change)

        identity = self._store.get_current()
        if identity is None:
            self._reset()
            return
        if identity.id == self._watched_id and (
            self.is_running or self._state is PollerState.COMPLETED
        ):
            return
        self._watch(identity)

    def stop(self) -> None:
        """
        Unmount: stop listening and cancel the pending tick.

        Nothing is kept; a later start() watches from the then-current
        identity.
        """
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._reset()

    async def shutdown(self) -> None:
        """Stop and wait until the polling task has finished."""
        task = self._task
        self.stop()
        if task is not None and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def retry(self) -> bool:
        """
        Run onboarding again after a failed attempt.

        Returns:
            True if onboarding completed; False if there was nothing to
            retry, an attempt was already running, or this one failed
            (see last_error).
        """
        if self._state is not PollerState.VERIFIED:
            return False

        identity = self._store.get_current()
        if identity is None or identity.id != self._watched_id:
            return False
        return await self._attempt(identity)

    def _on_session_change(self, state: SessionState) -> None:
        identity = state.identity
        if identity is None:
            if self._watched_id is not None:
                logger.info("Session cleared; verification polling stopped for %s", self._watched_id)
            self._reset()
        elif identity.id != self._watched_id:
            self._watch(identity)

    def _watch(self, identity: Identity) -> None:
        self._cancel()
        self._watched_id = identity.id
        self._state = PollerState.WATCHING
        self._last_error = None
        self._task = asyncio.get_running_loop().create_task(
            self._run(identity.id),
            name=f"verification-poller:{identity.id}",
        )
        logger.debug("Watching verification for %s every %ss", identity.id, self._interval)

    def _reset(self) -> None:
        self._cancel()
        self._watched_id = None
        self._state = PollerState.IDLE
        self._last_error = None

    def _cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        # the loop may end itself through navigation; it exits on its own then
        if task is not _current_task():
            task.cancel()

    async def _run(self, identity_id: str) -> None:
        try:
            while True:
                await asyncio.sleep(self._interval)
                if await self._tick(identity_id):
                    return
        except asyncio.CancelledError:
            logger.debug("Verification polling cancelled for %s", identity_id)
            raise

    async def _tick(self, identity_id: str) -> bool:
        """One refresh-and-evaluate cycle. Returns True when polling is over."""
        try:
            await self._store.refresh()
        except IdentityProviderError as e:
            logger.warning("Verification refresh failed for %s: %s", identity_id, e.message)
            return False

        # decide only on the value read after the refresh
        identity = self._store.get_current()
        if identity is None or identity.id != identity_id:
            return True
        if not identity.email_verified:
            return False
        return await self._attempt(identity)

    async def _attempt(self, identity: Identity) -> bool:
        # a tick and a manual retry must not run onboarding side by side
        if self._in_flight:
            return False

        self._in_flight = True
        try:
            return await self._complete(identity)
        finally:
            self._in_flight = False

    async def _complete(self, identity: Identity) -> bool:
        if self._state is PollerState.COMPLETED:
            return True

        self._state = PollerState.VERIFIED
        try:
            await self._onboarding.complete(identity)
        except ProvisioningError as e:
            if not self._still_watching(identity):
                return False
            self._last_error = e
            logger.error("Error completing registration for %s: %s", identity.id, e.code)
            return False

        # the session may have been cleared or switched while the writes ran
        if not self._still_watching(identity):
            logger.info("Registration for %s finished after its session ended", identity.id)
            return False

        self._state = PollerState.COMPLETED
        self._last_error = None
        logger.info("Registration completed for %s", identity.id)
        self._cancel()
        self._navigate(Route.DASHBOARD)
        return True

    def _still_watching(self, identity: Identity) -> bool:
        current = self._store.get_current()
        return (
            self._watched_id == identity.id
            and current is not None
            and current.id == identity.id
        )


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
