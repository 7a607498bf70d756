"""Shared fixtures: an isolated store over an in-process backend and a fixed clock."""

from datetime import datetime, timedelta, timezone

import pytest

from core.memory import MemoryStore
from core.storage import InMemoryBackend


class FakeClock:
    """Deterministic clock; advance() moves it forward."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FailingBackend:
    """Backend whose every load and save raises."""

    def __init__(self):
        self.save_attempts = 0

    def load(self):
        raise OSError("disk unavailable")

    def save(self, table):
        self.save_attempts += 1
        raise OSError("disk full")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def store(backend, clock):
    return MemoryStore(backend=backend, clock=clock)
