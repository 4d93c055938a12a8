"""Pytest configuration, shared fixtures and an asyncio fallback.

Async tests are marked with ``@pytest.mark.asyncio``. Some environments run
the suite without ``pytest-asyncio`` installed; the hook below runs those
coroutines on a fresh event loop instead.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from notely.api.main import create_app
from notely.auth.tokens import JWTManager
from notely.core.types import Identity, Role
from notely.store.memory import InMemoryNoteStore

TEST_SECRET = "test-secret-key"


def pytest_configure(config: pytest.Config) -> None:
    """Register local markers used in the suite."""
    config.addinivalue_line("markers", "asyncio: mark test as asyncio-compatible")


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run ``@pytest.mark.asyncio`` tests without external plugins."""
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    kwargs: dict[str, Any] = {
        arg: pyfuncitem.funcargs[arg]
        for arg in pyfuncitem._fixtureinfo.argnames
    }
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_func(**kwargs))
    finally:
        loop.close()
        asyncio.set_event_loop(asyncio.new_event_loop())
    return True


# ── Fixtures ─────────────────────────────────────────────────────


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        notely_env="dev",
        store_backend="memory",
        notely_jwt_secret=TEST_SECRET,
        notely_jwt_expiry_hours=1,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def store() -> InMemoryNoteStore:
    return InMemoryNoteStore()


@pytest.fixture()
def jwt_manager() -> JWTManager:
    return JWTManager(secret=TEST_SECRET, expiry_hours=1)


@pytest.fixture()
def admin_identity() -> Identity:
    return Identity(user_id="u-admin", tenant_id="t-acme", role=Role.ADMIN, tenant_slug="acme")


@pytest.fixture()
def member_identity() -> Identity:
    return Identity(user_id="u-member", tenant_id="t-acme", role=Role.MEMBER, tenant_slug="acme")


@pytest.fixture()
def client(settings: Settings, store: InMemoryNoteStore) -> TestClient:
    """API client over a fresh in-memory store (lifespan is not run)."""
    return TestClient(create_app(settings=settings, store=store))
