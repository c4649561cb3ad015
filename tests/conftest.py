"""Pytest configuration and shared fixtures for stormpath-client tests."""

import pytest

from stormpath_client.testing import FakeStormpathService, make_keypair


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Stormpath environment variables before each test.

    This prevents a developer's real credentials leaking into credential
    and configuration tests.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("STORMPATH_"):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def keypair():
    return make_keypair()


@pytest.fixture
def service():
    """A fake service with a few applications and directories on 25-item pages."""
    return FakeStormpathService(applications=3, directories=2)
