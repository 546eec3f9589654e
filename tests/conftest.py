"""
Pytest configuration and fixtures for VisitSwap tests
"""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")

import pytest

from visitswap.constants import SiteStatus
from visitswap.database import LedgerStore
from visitswap.models import Site, User


class FakeNotifier:
    """Records notifications instead of queueing them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def send_verification(self, email, token):
        if self.fail:
            raise ConnectionError("redis unavailable")
        self.sent.append(("verification", email, token))
        return True

    async def send_password_reset(self, email, token):
        if self.fail:
            raise ConnectionError("redis unavailable")
        self.sent.append(("reset", email, token))
        return True

    def last_token(self, kind):
        return [t for k, _, t in self.sent if k == kind][-1]


def make_user(store, email, credits=0, verified=True, name="Member"):
    """Insert a user directly; the hash is not a real bcrypt hash."""
    with store.transaction() as db:
        user = User(
            name=name,
            email=email,
            password_hash="not-a-bcrypt-hash",
            verified=verified,
            credits=credits,
        )
        db.add(user)
        db.flush()
    return user


def make_site(store, owner, title="Site", url="https://example.com", status=SiteStatus.ACTIVE):
    with store.transaction() as db:
        site = Site(user_id=owner.id, title=title, url=url, status=status)
        db.add(site)
        db.flush()
    return site


@pytest.fixture(scope="function")
def store():
    """
    Fresh in-memory ledger store per test
    """
    ledger_store = LedgerStore("sqlite://").open()
    ledger_store.create_all()
    yield ledger_store
    ledger_store.drop_all()
    ledger_store.close()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def visitor(store):
    return make_user(store, "visitor@example.com")


@pytest.fixture
def owner(store):
    return make_user(store, "owner@example.com")


@pytest.fixture
def site(store, owner):
    return make_site(store, owner, title="Owner's blog", url="https://owner.example.com")
