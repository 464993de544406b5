"""Protocols (interfaces) consumed by the core layer.

The driver never inspects recommender internals: it only asks which
optional side inputs a recommender needs.  Memory reporting is likewise
reached through a narrow callable so tests can substitute it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rec_driver.core.models import Capability


@runtime_checkable
class Recommender(Protocol):
    """Contract for the recommenders a program can drive.

    Any object exposing a :attr:`capabilities` attribute satisfies this
    protocol structurally (no explicit inheritance required).
    """

    capabilities: Capability
    """Side inputs this recommender requires, ``Capability.NONE`` if none."""


class MemoryReporter(Protocol):
    """Contract for the current-memory query used by the stats dump."""

    def __call__(self) -> str:
        """Return a human-readable figure such as ``"52.31 MB"``."""
        ...  # pragma: no cover
