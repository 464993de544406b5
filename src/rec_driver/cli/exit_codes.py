"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit after help, version or a completed run."""

ABORT: int = -1
"""Option parsing or validation failed.  Reported as 255 on POSIX."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception reached the last-resort hook."""

KEYBOARD_INTERRUPT: int = 130
"""A second Ctrl+C stopped the run.  POSIX convention (128 + SIGINT=2)."""
