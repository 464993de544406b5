"""Shared pytest fixtures and configuration for the rec-driver test suite.

Guidelines
----------
* No real signals are delivered; handlers are called directly.
* Process hooks installed by a program are restored after every test.
* Memory usage is stubbed so output is deterministic.
"""

from __future__ import annotations

import signal
import sys
from collections.abc import Callable, Iterator

import pytest

from rec_driver.cli.program import RecommenderProgram
from rec_driver.core.models import Capability

FAKE_MEMORY = "12.50 MB"


class StubRecommender:
    """Recommender exposing only a capability set."""

    def __init__(self, capabilities: Capability = Capability.NONE) -> None:
        self.capabilities = capabilities


class DummyProgram(RecommenderProgram[StubRecommender]):
    prog = "dummy"

    def __init__(self, *args: object, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self.ran = False

    def run_recommender(self) -> None:
        self.ran = True


@pytest.fixture(autouse=True)
def _restore_process_hooks() -> Iterator[None]:
    previous_handler = signal.getsignal(signal.SIGINT)
    previous_excepthook = sys.excepthook
    yield
    signal.signal(signal.SIGINT, previous_handler)
    sys.excepthook = previous_excepthook


@pytest.fixture
def make_program() -> Callable[..., DummyProgram]:
    """Factory building a :class:`DummyProgram` with stubbed memory."""

    def _factory(capabilities: Capability = Capability.NONE) -> DummyProgram:
        return DummyProgram(
            StubRecommender(capabilities),
            memory_reporter=lambda: FAKE_MEMORY,
        )

    return _factory
