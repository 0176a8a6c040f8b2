"""
Shared pytest fixtures for session store tests.

This module provides:
- FakeClock: a frozen, advanceable UTC clock for expiry tests, starting at the current second
- mongomock-backed session collections
- Manager store and request context fixtures
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Optional

import mongomock
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mongo_session import MongoManagerStore, SessionContext


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        # mongomock purges TTL-indexed records against the wall clock, so start from it
        self.now = start or datetime.now(timezone.utc).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    """Frozen clock starting at a whole second."""
    return FakeClock()


@pytest.fixture
def collection():
    """In-memory session collection."""
    client = mongomock.MongoClient()
    return client["session_test"]["session"]


@pytest.fixture
def manager(collection, clock):
    """Manager store bootstrapped on the in-memory collection."""
    return MongoManagerStore(collection, clock=clock)


@pytest.fixture
def ctx():
    """Background request context."""
    return SessionContext.background()
