"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container holds exactly one session store, one navigator and one
verification poller: the process hosts a single session.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IIdentityProvider
    from modules.auth.service import SessionStore
    from modules.auth.signup import SignupService
    from modules.navigation.service import Navigator
    from modules.onboarding.interfaces import IDocumentStore, IOnboardingService
    from modules.onboarding.poller import VerificationPoller


class ServiceContainer:
    """
    Container for all service instances.

    The external adapters (identity provider, document store) can be
    passed in; otherwise connect() builds the Supabase ones. Services
    are created lazily on first access and cached.
    """

    def __init__(
        self,
        identity_provider: "IIdentityProvider | None" = None,
        document_store: "IDocumentStore | None" = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings
        self._identity_provider = identity_provider
        self._document_store = document_store
        self._session_store: "SessionStore | None" = None
        self._signup_service: "SignupService | None" = None
        self._onboarding_service: "IOnboardingService | None" = None
        self._navigator: "Navigator | None" = None
        self._poller: "VerificationPoller | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def connect(self) -> None:
        """Build the Supabase adapters that were not injected."""
        from modules.navigation.models import Route
        from shared.database import get_supabase_client, get_supabase_public_client

        if self._identity_provider is None:
            from modules.auth.provider import SupabaseIdentityProvider
            self._identity_provider = SupabaseIdentityProvider(
                public_client=await get_supabase_public_client(),
                admin_client=await get_supabase_client(),
                email_redirect_to=f"{self.settings.frontend_url}{Route.VERIFY_EMAIL.value}",
            )
        if self._document_store is None:
            from modules.onboarding.repository import SupabaseDocumentStore
            self._document_store = SupabaseDocumentStore(await get_supabase_client())

    @property
    def identity_provider(self) -> "IIdentityProvider":
        if self._identity_provider is None:
            raise RuntimeError("Identity provider not configured; call connect() first")
        return self._identity_provider

    @property
    def document_store(self) -> "IDocumentStore":
        if self._document_store is None:
            raise RuntimeError("Document store not configured; call connect() first")
        return self._document_store

    @property
    def session_store(self) -> "SessionStore":
        """Get the session store instance."""
        if self._session_store is None:
            from modules.auth.service import SessionStore
            self._session_store = SessionStore(self.identity_provider)
        return self._session_store

    @property
    def signup(self) -> "SignupService":
        """Get the signup service instance."""
        if self._signup_service is None:
            from modules.auth.signup import SignupService
            self._signup_service = SignupService(self.session_store)
        return self._signup_service

    @property
    def onboarding(self) -> "IOnboardingService":
        """Get the onboarding service instance."""
        if self._onboarding_service is None:
            from modules.onboarding.service import OnboardingService
            self._onboarding_service = OnboardingService(self.document_store)
        return self._onboarding_service

    @property
    def navigator(self) -> "Navigator":
        """Get the navigator instance."""
        if self._navigator is None:
            from modules.navigation.service import Navigator
            self._navigator = Navigator()
        return self._navigator

    @property
    def poller(self) -> "VerificationPoller":
        """Get the verification poller, mounted with the verify-email view."""
        if self._poller is None:
            from modules.navigation.models import Route
            from modules.onboarding.poller import VerificationPoller
            poller = VerificationPoller(
                store=self.session_store,
                onboarding=self.onboarding,
                navigate=self.navigator.navigate,
                interval=self.settings.verification_poll_interval,
            )
            self.navigator.on_mount(Route.VERIFY_EMAIL, poller.start)
            self.navigator.on_unmount(Route.VERIFY_EMAIL, poller.stop)
            self._poller = poller
        return self._poller

    async def startup(self) -> None:
        """Connect adapters, wire the poller and resolve the persisted session."""
        await self.connect()
        _ = self.poller  # registers the verify-email mount hooks
        await self.session_store.initialize()

    async def shutdown(self) -> None:
        if self._poller is not None:
            await self._poller.shutdown()

    def reset(self) -> None:
        """
        Reset all cached services.

        Injected adapters are kept.
        """
        self._session_store = None
        self._signup_service = None
        self._onboarding_service = None
        self._navigator = None
        self._poller = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (tests, alternate adapters)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_store() -> "SessionStore":
    """FastAPI dependency for the session store."""
    return get_container().session_store


def get_signup_service() -> "SignupService":
    """FastAPI dependency for the signup service."""
    return get_container().signup


def get_navigator() -> "Navigator":
    """FastAPI dependency for the navigator."""
    return get_container().navigator


def get_verification_poller() -> "VerificationPoller":
    """FastAPI dependency for the verification poller."""
    return get_container().poller
