"""Shared fixtures for the survival test suite."""

from __future__ import annotations

import logging

import pytest

from survival.config import settings


class StubRandom:
    """Deterministic stand-in for :mod:`random`.

    ``random()`` always returns ``value`` and ``randrange(n)`` returns ``index``
    (clamped into range), so tests can force damage descent, message rolls and
    organ picks.
    """

    def __init__(self, value: float = 0.99, index: int = 0) -> None:
        self.value = value
        self.index = index

    def random(self) -> float:
        return self.value

    def randrange(self, stop: int) -> int:
        return min(self.index, stop - 1)


@pytest.fixture
def make_rng():
    return StubRandom


@pytest.fixture
def stay_rng():
    """Never descends and never passes a chance roll."""
    return StubRandom(0.99, 0)


@pytest.fixture
def descend_rng():
    """Always descends into the first child and passes every chance roll."""
    return StubRandom(0.0, 0)


@pytest.fixture(autouse=True)
def _restore_runtime_state():
    original = settings.current_settings()
    yield
    settings.apply_runtime_settings(original)
    logger = logging.getLogger("survival")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
