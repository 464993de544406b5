"""Running timing statistics for training, fit and evaluation.

The three series are append-only and keep every recorded duration.
Summaries are computed on request from a snapshot copy, so a report
triggered by a signal handler in the middle of an append still sees
a consistent list.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Literal

Series = Literal["training", "fit", "eval"]

# report label and display order
_LABELS: tuple[tuple[Series, str], ...] = (
    ("training", "iteration_time"),
    ("eval", "eval_time"),
    ("fit", "fit_time"),
)


def format_number(value: float) -> str:
    """Format *value* with at most two decimals and no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True, slots=True)
class SeriesSummary:
    """Aggregates over one timing series."""

    count: int
    minimum: float
    maximum: float
    mean: float

    def render(self, label: str) -> str:
        return (
            f"{label}: min={format_number(self.minimum)}, "
            f"max={format_number(self.maximum)}, "
            f"avg={format_number(self.mean)}"
        )


@dataclass
class TimingStats:
    """Durations, in seconds, of repeated operations."""

    training_time: list[float] = field(default_factory=list)
    fit_time: list[float] = field(default_factory=list)
    eval_time: list[float] = field(default_factory=list)

    def _series(self, series: Series) -> list[float]:
        if series == "training":
            return self.training_time
        if series == "fit":
            return self.fit_time
        if series == "eval":
            return self.eval_time
        raise ValueError(f"unknown timing series: {series!r}")

    def record(self, series: Series, seconds: float) -> None:
        self._series(series).append(float(seconds))

    @contextmanager
    def timed(self, series: Series) -> Iterator[None]:
        """Record the wall-clock duration of the ``with`` block.

        Nothing is recorded when the block raises.
        """
        target = self._series(series)
        start = time.perf_counter()
        yield
        target.append(time.perf_counter() - start)

    def summary(self, series: Series) -> SeriesSummary | None:
        """Return aggregates for *series*, or ``None`` if it is empty."""
        snapshot = list(self._series(series))
        if not snapshot:
            return None
        return SeriesSummary(
            count=len(snapshot),
            minimum=min(snapshot),
            maximum=max(snapshot),
            mean=sum(snapshot) / len(snapshot),
        )

    def report_lines(self, *, compute_fit: bool) -> list[str]:
        """Render one line per non-empty series.

        The fit series is only reported when *compute_fit* is set.
        """
        lines: list[str] = []
        for series, label in _LABELS:
            if series == "fit" and not compute_fit:
                continue
            summary = self.summary(series)
            if summary is not None:
                lines.append(summary.render(label))
        return lines
