"""
Pytest configuration and shared fixtures for evented tests.

This module provides:
- Pre-filled EventList / EventCollection fixtures
- A Recorder that captures subscriber payloads in call order
- A loguru capture fixture for log assertions
"""

import pytest
from loguru import logger

from evented import EventCollection, EventList


class Recorder:
    """Callable subscriber that remembers every payload it receives."""

    def __init__(self, name: str = "recorder", log: list = None):
        self.name = name
        self.calls = []
        self._log = log

    def __call__(self, payload):
        self.calls.append(payload)
        if self._log is not None:
            self._log.append((self.name, payload))

    @property
    def items(self):
        return [p.item for p in self.calls]

    @property
    def indexes(self):
        return [p.index for p in self.calls]


@pytest.fixture
def recorder():
    """Provide a fresh Recorder."""
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for named Recorders sharing an optional call log."""
    def _make(name: str = "recorder", log: list = None) -> Recorder:
        return Recorder(name, log)
    return _make


@pytest.fixture
def letters():
    """Provide an EventList holding ['A', 'B', 'C']."""
    return EventList(items=["A", "B", "C"])


@pytest.fixture
def numbers():
    """Provide an EventList holding 1..5."""
    return EventList(items=[1, 2, 3, 4, 5])


@pytest.fixture
def tags():
    """Provide an EventCollection holding three tag names."""
    return EventCollection(items=["title", "artist", "album"])


@pytest.fixture
def log_messages():
    """Capture loguru messages (DEBUG and above) emitted during a test."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
