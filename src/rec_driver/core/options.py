"""Option registry — the shared command-line vocabulary.

Every recommender program recognises the flags declared in
:data:`OPTIONS`.  Each entry names a value kind and the
:class:`~rec_driver.core.models.DriverState` field it writes.  Concrete
programs may register additional flags on the parser before parsing.

Parsing never prints or exits: malformed input raises
:class:`~rec_driver.exceptions.OptionError` and bare tokens are returned
to the caller, which decides what to do with them.
"""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, NoReturn

from rec_driver.core.models import DriverState
from rec_driver.exceptions import OptionError

OptionKind = Literal["str", "append", "int", "uint", "float", "flag"]


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Declaration of one long-form flag."""

    flag: str
    """Flag name without the leading dashes, e.g. ``"training-file"``."""

    kind: OptionKind
    dest: str
    metavar: str | None = None
    help: str = ""


# ---------------------------------------------------------------------------
# Value conversions
# ---------------------------------------------------------------------------

def uint(text: str) -> int:
    """Convert *text* to a non-negative integer.

    The function name appears in argparse's error message
    (``invalid uint value``).
    """
    value = int(text)
    if value < 0:
        raise ValueError(f"negative value: {text}")
    return value


_CONVERTERS: dict[str, Any] = {"int": int, "uint": uint, "float": float}


class _AppendOptionsAction(argparse.Action):
    """Concatenate repeated occurrences, each preceded by a space."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        setattr(namespace, self.dest, f"{getattr(namespace, self.dest, '')} {values}")


# ---------------------------------------------------------------------------
# The shared vocabulary
# ---------------------------------------------------------------------------

OPTIONS: tuple[OptionSpec, ...] = (
    # string-valued options
    OptionSpec("training-file", "str", "training_file", "FILE", "read training data from FILE"),
    OptionSpec("test-file", "str", "test_file", "FILE", "read test data from FILE"),
    OptionSpec("recommender", "str", "method", "METHOD", "use recommender METHOD"),
    OptionSpec(
        "recommender-options", "append", "recommender_options", "OPTIONS",
        "hyperparameters for the recommender; may be repeated",
    ),
    OptionSpec("data-dir", "str", "data_dir", "DIR", "load all files from DIR"),
    OptionSpec("user-attributes", "str", "user_attributes_file", "FILE", "file with user attribute information"),
    OptionSpec("item-attributes", "str", "item_attributes_file", "FILE", "file with item attribute information"),
    OptionSpec("user-relations", "str", "user_relations_file", "FILE", "file with user relation information"),
    OptionSpec("item-relations", "str", "item_relations_file", "FILE", "file with item relation information"),
    OptionSpec("save-model", "str", "save_model_file", "FILE", "save computed model to FILE"),
    OptionSpec("load-model", "str", "load_model_file", "FILE", "load model from FILE"),
    OptionSpec("save-user-mapping", "str", "save_user_mapping_file", "FILE", "save user ID mapping to FILE"),
    OptionSpec("save-item-mapping", "str", "save_item_mapping_file", "FILE", "save item ID mapping to FILE"),
    OptionSpec("load-user-mapping", "str", "load_user_mapping_file", "FILE", "load user ID mapping from FILE"),
    OptionSpec("load-item-mapping", "str", "load_item_mapping_file", "FILE", "load item ID mapping from FILE"),
    OptionSpec("prediction-file", "str", "prediction_file", "FILE", "write predictions to FILE"),
    OptionSpec("measure", "str", "measure", "MEASURE", "evaluation measure used by iteration search"),
    # integer-valued options
    OptionSpec("find-iter", "int", "find_iter", "N", "report evaluation results every N iterations"),
    OptionSpec("max-iter", "int", "max_iter", "N", "perform at most N iterations"),
    OptionSpec("random-seed", "int", "random_seed", "N", "initialise the random number generator with N"),
    OptionSpec("cross-validation", "uint", "cross_validation", "K", "perform K-fold cross-validation"),
    # float-valued options
    OptionSpec("epsilon", "float", "epsilon", "NUM", "stop iterating when the measure worsens by more than NUM"),
    OptionSpec("cutoff", "float", "cutoff", "NUM", "stop iterating when the measure exceeds NUM"),
    OptionSpec("test-ratio", "float", "test_ratio", "NUM", "use a ratio of NUM of the training data for evaluation"),
    # boolean options
    OptionSpec("compute-fit", "flag", "compute_fit", help="display fit on training data"),
    OptionSpec("no-id-mapping", "flag", "no_id_mapping", help="do not map user and item IDs to internal IDs"),
)

META_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("help", "flag", "show_help", help="display this usage information and exit"),
    OptionSpec("version", "flag", "show_version", help="display version information and exit"),
)

_STATE_FIELDS: frozenset[str] = frozenset(
    f.name for f in dataclasses.fields(DriverState) if f.init
)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class OptionParser(argparse.ArgumentParser):
    """Argument parser that reports errors by raising :class:`OptionError`."""

    def __init__(self, prog: str | None = None, description: str | None = None) -> None:
        super().__init__(
            prog=prog,
            description=description,
            add_help=False,
            allow_abbrev=False,
        )

    def error(self, message: str) -> NoReturn:
        raise OptionError(message)


def add_option(parser: argparse.ArgumentParser, spec: OptionSpec) -> None:
    """Register *spec* on *parser*.

    Absent options leave no attribute on the namespace, so the
    :class:`DriverState` defaults apply.
    """
    name = f"--{spec.flag}"
    if spec.kind == "flag":
        parser.add_argument(
            name, dest=spec.dest, action="store_true", default=argparse.SUPPRESS, help=spec.help,
        )
    elif spec.kind == "append":
        parser.add_argument(
            name, dest=spec.dest, action=_AppendOptionsAction,
            default=argparse.SUPPRESS, metavar=spec.metavar, help=spec.help,
        )
    else:
        parser.add_argument(
            name, dest=spec.dest, type=_CONVERTERS.get(spec.kind, str),
            default=argparse.SUPPRESS, metavar=spec.metavar, help=spec.help,
        )


def build_parser(prog: str | None = None, description: str | None = None) -> OptionParser:
    """Construct a parser carrying the shared vocabulary."""
    parser = OptionParser(prog=prog, description=description)
    for spec in OPTIONS + META_OPTIONS:
        add_option(parser, spec)
    return parser


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedOptions:
    """Result of one parse: the populated state plus everything else."""

    state: DriverState
    extra_args: tuple[str, ...]
    """Bare tokens no option consumed, in command-line order."""

    show_help: bool = False
    show_version: bool = False
    namespace: argparse.Namespace = dataclasses.field(default_factory=argparse.Namespace)
    """Raw namespace; holds values of flags added by concrete programs."""


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def parse_options(
    parser: argparse.ArgumentParser,
    argv: Sequence[str],
    state: DriverState | None = None,
) -> ParsedOptions:
    """Parse *argv* with *parser*, writing option values onto *state*.

    A fresh :class:`DriverState` is used when *state* is ``None``.
    Fields whose flag is absent keep their current value.

    Raises
    ------
    OptionError
        For an unrecognised flag, a value that fails conversion, or a
        flag whose value is missing.
    """
    namespace, extras = parser.parse_known_args(list(argv), argparse.Namespace())

    for token in extras:
        if token.startswith("-") and len(token) > 1 and not _is_number(token):
            raise OptionError(f"unrecognized option: {token}")

    if state is None:
        state = DriverState()
    values = vars(namespace)
    for name, value in values.items():
        if name in _STATE_FIELDS:
            setattr(state, name, value)
    return ParsedOptions(
        state=state,
        extra_args=tuple(extras),
        show_help=bool(values.get("show_help", False)),
        show_version=bool(values.get("show_version", False)),
        namespace=namespace,
    )
