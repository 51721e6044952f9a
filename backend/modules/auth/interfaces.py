"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
identity provider without touching the session logic.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import Identity

from .models import SessionState

SessionListener = Callable[[SessionState], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for the external identity provider.

    Every method raises IdentityProviderError with a translated
    ProviderErrorCode on failure.
    """

    async def create_account(self, email: str, password: str) -> Identity:
        """
        Create an account and send the verification email.

        Args:
            email: Account email
            password: Account password

        Returns:
            The new, unverified Identity

        Raises:
            IdentityProviderError: EMAIL_IN_USE, INVALID_EMAIL,
                OPERATION_NOT_ALLOWED, WEAK_PASSWORD or UNKNOWN
        """
        ...

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in with email and password."""
        ...

    async def sign_out(self) -> None:
        """End the provider session."""
        ...

    async def send_verification_email(self, identity: Identity) -> None:
        """Send (again) the verification email for an identity."""
        ...

    async def refresh(self, identity: Identity) -> Identity:
        """
        Re-fetch an existing identity from the provider.

        Args:
            identity: The identity to re-read

        Returns:
            Identity with the provider's current verification flag and email
        """
        ...

    async def restore_session(self) -> Optional[Identity]:
        """
        Resolve a persisted session, if any.

        Returns:
            The identity of the persisted session, None when there is none
        """
        ...


@runtime_checkable
class ISessionStore(Protocol):
    """
    Interface for the process-wide session.

    This is the only writer of the current Identity; everything else
    reads it through get_current() or a subscription.
    """

    @property
    def loading(self) -> bool:
        """Whether the persisted session is still being resolved."""
        ...

    @property
    def state(self) -> SessionState:
        """Snapshot of the current session."""
        ...

    def get_current(self) -> Optional[Identity]:
        """Return the current identity, or None when signed out."""
        ...

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        """
        Register a listener called synchronously on every session change.

        Returns:
            A callable that removes the listener
        """
        ...

    async def sign_up(self, email: str, password: str) -> Identity:
        """Create an account and make it the current identity."""
        ...

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in and make the identity current."""
        ...

    async def sign_out(self) -> None:
        """Sign out and clear the current identity."""
        ...

    async def refresh(self) -> Optional[Identity]:
        """Re-read the current identity from the provider."""
        ...

    async def send_verification_email(self) -> bool:
        """Resend the verification email for the current identity."""
        ...
