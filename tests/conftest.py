"""Shared fixtures: in-memory storage, a controllable clock and wired stores."""

import pytest

from softpack.auth.auth_store import AuthStore
from softpack.models.user import SessionUser
from softpack.safety.rate_limiter import RateLimiter
from softpack.security.audit_log import SecurityLog, null_sink
from softpack.security.hasher import PasswordHasher
from softpack.services.admin_service import AdminService
from softpack.services.catalog_store import CatalogStore
from softpack.storage.kv_store import MemoryStore
from softpack.utils.config import SecuritySettings


class FakeClock:
    """Monotonic clock the test moves by hand"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def storage():
    return MemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    return RateLimiter(clock=clock)


@pytest.fixture
def security_log(storage):
    return SecurityLog(storage, sink=null_sink)


@pytest.fixture
def hasher():
    return PasswordHasher()


@pytest.fixture
def make_auth(storage, hasher, rate_limiter, security_log):
    """Factory for AuthStores sharing one user table, limiter and log"""
    def _make(session_key: str = "softpack:session:v1:test"):
        return AuthStore(
            storage=storage,
            hasher=hasher,
            rate_limiter=rate_limiter,
            security_log=security_log,
            settings=SecuritySettings(),
            session_key=session_key,
        )
    return _make


@pytest.fixture
def auth(make_auth):
    return make_auth()


@pytest.fixture
def catalog(storage):
    return CatalogStore(storage)


@pytest.fixture
def admin_service(catalog, security_log):
    return AdminService(catalog, security_log)


@pytest.fixture
def admin_user():
    return SessionUser(id="100", email="gademoff@admin.com", name="Gademoff", role="admin")


@pytest.fixture
def plain_user():
    return SessionUser(id="200", email="alice@example.com", name="Alice", role="user")


@pytest.fixture
def event_names(security_log):
    """Names of the persisted security events, oldest first"""
    def _names():
        return [entry.event for entry in security_log.entries()]
    return _names
