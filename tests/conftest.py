"""Shared fixtures for StepAuth tests."""

from __future__ import annotations

import pytest

from stepauth_core.engine import AuthConfig, StepAuth
from stepauth_core.providers.local import LocalProvider, PasswordHasher
from stepauth_core.sms.delivery import InMemorySMSSender

TEST_SIGNING_KEY = "test-signing-key-0123456789abcdef-xyz"
START_TIME = 1_700_000_000.0

PRINCIPAL = "a@x.com"
PASSWORD = "correct horse battery staple"


class FakeClock:
    """Manually advanced Unix clock."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sms_sender():
    """In-memory SMS transport."""
    return InMemorySMSSender()


@pytest.fixture
def provider():
    """Local provider with one account and a cheap hash."""
    local = LocalProvider(hasher=PasswordHasher(iterations=1000))
    local.add_user(PRINCIPAL, PASSWORD)
    return local


@pytest.fixture
def make_auth(clock, sms_sender, provider):
    """Build an engine; keyword arguments become AuthConfig fields."""

    def _make(**overrides) -> StepAuth:
        config = AuthConfig(signing_key=TEST_SIGNING_KEY, **overrides)
        return StepAuth(config=config, provider=provider, sms_sender=sms_sender, clock=clock)

    return _make


@pytest.fixture
def auth(make_auth):
    """Engine with default settings."""
    return make_auth()
