"""Custom exception hierarchy for rec-driver.

Every user or configuration error detected while handling the command
line must be raised as a subclass of :class:`RecDriverError`, so that
the program's error boundary can report it as a clean diagnostic and
exit with :data:`~rec_driver.cli.exit_codes.ABORT`.

Hierarchy
---------
RecDriverError
├── OptionError
├── ValidationError
└── UsageError
"""

from __future__ import annotations


class RecDriverError(Exception):
    """Base exception for all rec-driver errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Option parsing --------------------------------------------------------

class OptionError(RecDriverError):
    """Raised for an unknown flag, a malformed value or a missing value."""


# --- Validation ------------------------------------------------------------

class ValidationError(RecDriverError):
    """Raised when parsed options violate a cross-field constraint."""


class UsageError(RecDriverError):
    """Raised when the command line cannot be understood at all.

    The error boundary prints the program usage after the message.
    """
