"""Fixtures for the HTTP tests: an app wired to the in-memory adapters."""

import time

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import ServiceContainer


@pytest.fixture
def container(identity_provider, document_store, test_settings) -> ServiceContainer:
    return ServiceContainer(
        identity_provider=identity_provider,
        document_store=document_store,
        settings=test_settings,
    )


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    """Client with the lifespan run, so the session is already resolved."""
    with TestClient(app, follow_redirects=False) as client:
        yield client


@pytest.fixture
def eventually():
    """Wait from the test thread for the app's event loop to catch up."""

    def _eventually(condition, timeout: float = 2.0) -> None:
        deadline = time.monotonic() + timeout
        while not condition():
            if time.monotonic() > deadline:
                pytest.fail("Condition not met before timeout")
            time.sleep(0.005)

    return _eventually
