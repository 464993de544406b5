"""Base class for recommender command-line programs.

:class:`RecommenderProgram` owns one run of a program:

1. install the interrupt and last-resort exception hooks;
2. parse the command line through the option registry;
3. handle ``--version`` and ``--help``;
4. build the seeded :class:`~rec_driver.core.models.RunConfig`;
5. validate option combinations;
6. hand over to :meth:`RecommenderProgram.run_recommender`.

Configuration errors never escape as tracebacks.  They are printed to
stderr and the process exits with :data:`exit_codes.ABORT`.

Ctrl+C does not stop a run: the first interrupt prints the timing
statistics gathered so far and the run carries on.  A further interrupt
prints them again and then stops the program.
"""

from __future__ import annotations

import enum
import logging
import signal
import sys
import threading
import traceback
from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import FrameType, TracebackType
from typing import Generic, NoReturn, TypeVar

from rec_driver.cli import exit_codes
from rec_driver.cli.console import console, out
from rec_driver.core.models import DriverState, RunConfig
from rec_driver.core.options import OptionParser, ParsedOptions, build_parser, parse_options
from rec_driver.core.protocols import MemoryReporter, Recommender
from rec_driver.core.stats import TimingStats
from rec_driver.core.validation import validate
from rec_driver.exceptions import RecDriverError, UsageError
from rec_driver.infra.memory import memory_usage
from rec_driver.version import __version__

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Recommender)


class LifecycleState(enum.Enum):
    CONSTRUCTED = "constructed"
    PARSING = "parsing"
    VALIDATING = "validating"
    VALIDATED = "validated"
    RUNNING = "running"
    TERMINATED = "terminated"


class RecommenderProgram(ABC, Generic[R]):
    """Option handling and run lifecycle shared by recommender programs.

    Parameters
    ----------
    recommender:
        The recommender to drive, or ``None`` if the concrete program
        only creates it inside :meth:`run_recommender`.  Its
        capabilities decide which side-input files are required.
    memory_reporter:
        Callable returning the current memory figure for the stats dump.

    Subclasses implement :meth:`run_recommender` and may override
    :meth:`setup_options`, :meth:`show_version` and
    :meth:`check_parameters`.
    """

    prog: str = "rec-driver"
    description: str | None = None
    version: str = __version__

    def __init__(
        self,
        recommender: R | None = None,
        *,
        memory_reporter: MemoryReporter = memory_usage,
    ) -> None:
        self.recommender: R | None = recommender
        self.state: DriverState = DriverState()
        self.stats: TimingStats = TimingStats()
        self.run_config: RunConfig | None = None
        self.parser: OptionParser | None = None
        self.options: ParsedOptions | None = None
        self.lifecycle: LifecycleState = LifecycleState.CONSTRUCTED
        self._memory_reporter = memory_reporter
        self._hooks_installed = False
        self._interrupt_count = 0

    # ------------------------------------------------------------------
    # Extension points
    # ------------------------------------------------------------------

    def setup_options(self, parser: OptionParser) -> None:
        """Register program-specific flags on *parser* before parsing."""

    def show_version(self) -> None:
        out.print(f"{self.prog} {self.version}", markup=False)

    def usage(self, exit_code: int) -> NoReturn:
        """Print usage and exit with *exit_code*.

        Usage goes to stdout for ``--help`` and to stderr otherwise.
        """
        text = self.parser.format_help() if self.parser is not None else self.prog
        target = out if exit_code == exit_codes.SUCCESS else console
        target.print(text.rstrip("\n"), markup=False)
        self._transition(LifecycleState.TERMINATED)
        sys.exit(exit_code)

    def check_parameters(self, extra_args: Sequence[str]) -> None:
        """Validate the parsed options; override to add program rules."""
        validate(self.state, self.recommender, extra_args)

    @abstractmethod
    def run_recommender(self) -> None:
        """Train, evaluate or predict with the validated configuration."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _transition(self, lifecycle: LifecycleState) -> None:
        logger.debug("%s: %s -> %s", self.prog, self.lifecycle.value, lifecycle.value)
        self.lifecycle = lifecycle

    def run(self, argv: Sequence[str] | None = None) -> None:
        """Parse and validate *argv*; return once the options are valid.

        Exits the process for ``--version``, ``--help`` and every
        option or validation error.
        """
        self.install_hooks()
        self._transition(LifecycleState.PARSING)

        self.parser = build_parser(prog=self.prog, description=self.description)
        self.setup_options(self.parser)
        args = sys.argv[1:] if argv is None else argv
        try:
            self.options = parse_options(self.parser, args, self.state)
        except RecDriverError as exc:
            self.abort(str(exc))

        if self.options.show_version:
            self._transition(LifecycleState.TERMINATED)
            self.show_version()
            sys.exit(exit_codes.SUCCESS)
        if self.options.show_help:
            self.usage(exit_codes.SUCCESS)

        self.run_config = RunConfig.from_seed(self.state.random_seed)
        if self.run_config.seeded:
            logger.debug("random seed set to %d", self.run_config.random_seed)

        self._transition(LifecycleState.VALIDATING)
        try:
            self.check_parameters(self.options.extra_args)
        except UsageError as exc:
            console.print(str(exc), markup=False)
            console.print()
            self.usage(exit_codes.ABORT)
        except RecDriverError as exc:
            self.abort(str(exc), hint=exc.hint)
        self._transition(LifecycleState.VALIDATED)

    def main(self, argv: Sequence[str] | None = None) -> NoReturn:
        """Script-level error boundary: run, delegate, exit.

        Unexpected exceptions from the delegated run are reported with
        the current statistics and mapped to
        :data:`exit_codes.UNEXPECTED_ERROR`.
        """
        self.run(argv)
        self._transition(LifecycleState.RUNNING)
        try:
            self.run_recommender()
        except KeyboardInterrupt:
            console.print("\n[yellow]Aborted by user.[/yellow]")
            sys.exit(exit_codes.KEYBOARD_INTERRUPT)
        except Exception as exc:  # noqa: BLE001
            self.report_unexpected(type(exc), exc, exc.__traceback__)
            sys.exit(exit_codes.UNEXPECTED_ERROR)
        finally:
            self._transition(LifecycleState.TERMINATED)
        sys.exit(exit_codes.SUCCESS)

    def abort(self, message: str, *, hint: str | None = None) -> NoReturn:
        """Report a configuration error and exit with :data:`exit_codes.ABORT`."""
        console.print(message, markup=False)
        if hint:
            console.print(hint, markup=False)
        self._transition(LifecycleState.TERMINATED)
        sys.exit(exit_codes.ABORT)

    # ------------------------------------------------------------------
    # Process hooks
    # ------------------------------------------------------------------

    def install_hooks(self) -> None:
        """Install the SIGINT and ``sys.excepthook`` handlers once per program."""
        if self._hooks_installed:
            return
        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._excepthook
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self._interrupt_handler)
        else:
            logger.debug("not on the main thread; SIGINT handler not installed")
        self._hooks_installed = True

    def _interrupt_handler(self, signum: int, frame: FrameType | None) -> None:
        self._interrupt_count += 1
        self.display_stats()
        if self._interrupt_count > 1:
            raise KeyboardInterrupt

    def _excepthook(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            self._previous_excepthook(exc_type, exc, tb)
            return
        self.report_unexpected(exc_type, exc, tb)

    def report_unexpected(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue."
        )
        console.print(f"  {exc_type.__name__}: {exc}", markup=False)
        if tb is not None:
            console.print("".join(traceback.format_tb(tb)).rstrip("\n"), markup=False)
        self.display_stats()

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def display_stats(self) -> None:
        """Print timing summaries and the memory line to stderr."""
        for line in self.stats.report_lines(compute_fit=self.state.compute_fit):
            console.print(line, markup=False)
        console.print(f"memory {self._memory_reporter()}", markup=False)
