"""Shared test fixtures for note-copilot."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from knowledge import KnowledgeStore, MemoryBlobStore  # noqa: E402

FROZEN_NOW = datetime(2026, 10, 19, 10, 0, 0)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FROZEN_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class SequentialIds:
    def __init__(self):
        self.counter = 0

    def __call__(self, prefix: str) -> str:
        self.counter += 1
        return f"{prefix}-{self.counter}"


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def now(clock):
    return clock.now


@pytest.fixture
def id_factory():
    return SequentialIds()


@pytest.fixture
def port():
    """In-memory persistence port."""
    return MemoryBlobStore()


@pytest.fixture
def store(port, clock, id_factory):
    return KnowledgeStore(port, clock=clock, id_factory=id_factory)
