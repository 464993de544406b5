"""CLI console helpers with optional Rich support.

Two proxies are exposed: :data:`console` writes diagnostics to stderr,
:data:`out` writes usage and version text to stdout.  Rich is imported
lazily so that the abort and stats paths keep working when it is not
installed.
"""

from __future__ import annotations

import sys
from typing import Any

from rec_driver.exceptions import RecDriverError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``RecDriverError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise RecDriverError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr or stdout."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr, highlight=False, emoji=False)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def _plain_stream(self) -> Any:
        return sys.stderr if self._stderr else sys.stdout

    def print(self, *objects: object, markup: bool = True) -> None:
        """Render with Rich when available, else plain print.

        Lines are never wrapped, so option names in messages stay intact.
        """
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except RecDriverError:
            print(*objects, file=self._plain_stream())
            return
        rich_console.print(*objects, markup=markup, soft_wrap=True)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
