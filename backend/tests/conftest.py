"""
Shared test fixtures and utilities.

This module provides the in-memory identity provider and document store
used across all test modules, plus a few helpers for async polling tests.
"""

import asyncio
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from api.dependencies import reset_container
from modules.auth.exceptions import IdentityProviderError
from modules.auth.models import ProviderErrorCode
from modules.auth.service import SessionStore
from modules.onboarding.exceptions import DocumentWriteError
from modules.onboarding.models import SERVER_TIMESTAMP
from shared.config import Settings, get_settings
from shared.models import Identity


class FakeIdentityProvider:
    """
    In-memory identity provider.

    Accounts live in a dict keyed by email. Verification is flipped from
    the test with verify(), the way a click on the emailed link would.
    """

    def __init__(self):
        self.accounts: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.refresh_calls = 0
        self.verification_emails: list[str] = []
        self.persisted: Optional[Identity] = None
        self.failures: dict[str, IdentityProviderError] = {}
        # refresh calls from this number on block until refresh_released is set
        self.hold_refresh_from: Optional[int] = None
        self.refresh_released = asyncio.Event()
        self._ids = itertools.count(1)

    def fail(self, method: str, code: ProviderErrorCode, raw_code: Optional[str] = None) -> None:
        self.failures[method] = IdentityProviderError(code, raw_code=raw_code)

    def add_account(self, email: str, password: str, verified: bool = False) -> Identity:
        self.accounts[email] = {
            "id": f"user-{next(self._ids)}",
            "password": password,
            "verified": verified,
        }
        return self._identity(email)

    def verify(self, email: str) -> None:
        self.accounts[email]["verified"] = True

    def _raise_if_failing(self, method: str) -> None:
        self.calls.append(method)
        if method in self.failures:
            raise self.failures[method]

    def _identity(self, email: str) -> Identity:
        account = self.accounts[email]
        return Identity(id=account["id"], email=email, email_verified=account["verified"])

    async def create_account(self, email: str, password: str) -> Identity:
        self._raise_if_failing("create_account")
        if email in self.accounts:
            raise IdentityProviderError(ProviderErrorCode.EMAIL_IN_USE, raw_code="user_already_exists")
        identity = self.add_account(email, password)
        self.verification_emails.append(email)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        self._raise_if_failing("sign_in")
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise IdentityProviderError(ProviderErrorCode.INVALID_CREDENTIALS, raw_code="invalid_credentials")
        return self._identity(email)

    async def sign_out(self) -> None:
        self._raise_if_failing("sign_out")

    async def send_verification_email(self, identity: Identity) -> None:
        self._raise_if_failing("send_verification_email")
        self.verification_emails.append(identity.email)

    async def refresh(self, identity: Identity) -> Identity:
        self._raise_if_failing("refresh")
        self.refresh_calls += 1
        if self.hold_refresh_from is not None and self.refresh_calls >= self.hold_refresh_from:
            await self.refresh_released.wait()
        return self._identity(identity.email)

    async def restore_session(self) -> Optional[Identity]:
        self._raise_if_failing("restore_session")
        return self.persisted


class FakeDocumentStore:
    """
    In-memory document store.

    SERVER_TIMESTAMP placeholders are resolved to an increasing clock so
    tests can tell a rewrite from the first write.
    """

    def __init__(self):
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.writes: list[tuple[str, str]] = []
        self.fail_collections: set[str] = set()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    async def upsert(self, collection: str, key: str, record: dict[str, Any]) -> None:
        self.writes.append((collection, key))
        if collection in self.fail_collections:
            raise DocumentWriteError(collection, key, "unavailable")
        now = self._now()
        resolved = {k: now if v == SERVER_TIMESTAMP else v for k, v in record.items()}
        self.collections.setdefault(collection, {})[key] = resolved

    def get(self, collection: str, key: str) -> Optional[dict[str, Any]]:
        return self.collections.get(collection, {}).get(key)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and cached settings around each test."""
    reset_container()
    get_settings.cache_clear()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def session_store(identity_provider) -> SessionStore:
    """Session store whose persisted session already resolved to signed out."""
    store = SessionStore(identity_provider)
    store._loading = False
    return store


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a short poll interval and no Supabase configuration."""
    return Settings(
        _env_file=None,
        verification_poll_interval=0.01,
        supabase_url="",
        supabase_anon_key="",
        supabase_service_role_key="",
    )


@pytest.fixture
def wait_until():
    """Await a condition, failing the test if it does not hold in time."""

    async def _wait_until(condition, timeout: float = 2.0, interval: float = 0.005) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not condition():
            if loop.time() > deadline:
                pytest.fail("Condition not met before timeout")
            await asyncio.sleep(interval)

    return _wait_until
