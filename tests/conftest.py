"""Shared test fixtures."""

from datetime import UTC, datetime

import httpx
import pytest

from secure_storage import ClientContext, EncryptionPolicy, HeaderResponse, RequestContext
from secure_storage.config import DEPLOYMENT_MODE_ENV, ENCRYPTION_KEY_ENV
from secure_storage.policy import SECURE_POLICY
from secure_storage.stores import InMemoryLocalStore

# Low iteration count keeps key derivation fast in tests.
FAST_ITERATIONS = 1_000
PASSPHRASE = "test-passphrase"


class FakeClock:
    def __init__(self, start: float | None = None):
        self._now = start if start is not None else datetime.now(UTC).timestamp()

    def now(self) -> datetime:
        return datetime.fromtimestamp(self._now, tz=UTC)

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture(autouse=True)
def development_env(monkeypatch):
    monkeypatch.delenv(DEPLOYMENT_MODE_ENV, raising=False)
    monkeypatch.delenv(ENCRYPTION_KEY_ENV, raising=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def local_store():
    return InMemoryLocalStore()


@pytest.fixture
def client_ctx(local_store):
    return ClientContext(cookies=httpx.Cookies(), local_store=local_store)


@pytest.fixture
def response():
    return HeaderResponse()


@pytest.fixture
def request_ctx(response):
    return RequestContext(cookie_header=None, response=response)


@pytest.fixture
def plain_policy():
    return EncryptionPolicy(passphrase=PASSPHRASE, iterations=FAST_ITERATIONS)


@pytest.fixture
def secure_policy():
    return SECURE_POLICY.with_overrides(passphrase=PASSPHRASE, iterations=FAST_ITERATIONS)
