"""Core layer — option registry, validation and timing statistics.

Rules
-----
* No ``print()`` calls.
* No imports from ``cli``.
* Errors are raised as :class:`~rec_driver.exceptions.RecDriverError`
  subclasses; deciding how to exit is the CLI layer's job.
"""

from rec_driver.core.models import Capability, DriverState, RunConfig
from rec_driver.core.options import OPTIONS, OptionSpec, ParsedOptions, build_parser, parse_options
from rec_driver.core.protocols import MemoryReporter, Recommender
from rec_driver.core.stats import SeriesSummary, TimingStats
from rec_driver.core.validation import validate

__all__: list[str] = [
    "OPTIONS",
    "Capability",
    "DriverState",
    "MemoryReporter",
    "OptionSpec",
    "ParsedOptions",
    "Recommender",
    "RunConfig",
    "SeriesSummary",
    "TimingStats",
    "build_parser",
    "parse_options",
    "validate",
]
