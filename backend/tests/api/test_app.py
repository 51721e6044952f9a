"""Tests for the application factory and error handling."""

import pytest

from api.app import _status_for
from api.dependencies import ServiceContainer, get_container
from modules.auth.exceptions import IdentityProviderError, SignupValidationError
from modules.auth.models import ProviderErrorCode
from modules.onboarding.exceptions import ProfileWriteFailedError
from shared.exceptions import AuthenticationError, ClkkError, NotFoundError


class TestStatusFor:
    @pytest.mark.parametrize("error,expected", [
        (SignupValidationError({"email": "Invalid email address"}), 422),
        (AuthenticationError("nope"), 401),
        (NotFoundError("missing"), 404),
        (IdentityProviderError(ProviderErrorCode.UNKNOWN), 502),
        (ProfileWriteFailedError("user-1"), 502),
        (ClkkError("other"), 400),
    ])
    def test_maps_error_to_status(self, error, expected):
        assert _status_for(error) == expected


class TestCreateApp:
    def test_installs_container(self, app, container):
        """create_app should make the given container the process container."""
        assert get_container() is container

    def test_routes(self, app):
        paths = {route.path for route in app.routes}
        assert {
            "/",
            "/signup",
            "/login",
            "/logout",
            "/verify-email",
            "/verify-email/resend",
            "/verify-email/retry",
            "/dashboard",
            "/api/health",
            "/api/ready",
        } <= paths


class TestServiceContainer:
    def test_requires_adapters(self, test_settings):
        container = ServiceContainer(settings=test_settings)
        with pytest.raises(RuntimeError, match="connect"):
            container.session_store

    def test_services_are_cached(self, container):
        assert container.session_store is container.session_store
        assert container.signup is container.signup
        assert container.poller is container.poller

    @pytest.mark.asyncio
    async def test_startup_resolves_session_and_mounts_poller(self, container, identity_provider):
        """After startup the poller follows the verify-email view."""
        identity_provider.persisted = identity_provider.add_account("a@example.com", "secret1")

        await container.startup()

        assert container.session_store.loading is False
        assert container.session_store.get_current().email == "a@example.com"

        container.navigator.navigate("/verify-email")
        assert container.poller.is_running is True
        container.navigator.navigate("/")
        assert container.poller.is_running is False

        await container.shutdown()

    def test_reset_keeps_adapters(self, container, identity_provider):
        store = container.session_store
        container.reset()
        assert container.session_store is not store
        assert container.identity_provider is identity_provider
