"""Domain models for rec-driver.

:class:`DriverState` is the one mutable object in this package: it is
filled in by the option registry, checked by the validator, and then
handed to the concrete recommender run.  :class:`RunConfig` is the
frozen, per-run configuration derived from it.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from rec_driver.data.entity_mapping import EntityMapping
from rec_driver.data.sparse_boolean_matrix import SparseBooleanMatrix


# ---------------------------------------------------------------------------
# Recommender capabilities
# ---------------------------------------------------------------------------

class Capability(enum.Flag):
    """Optional side inputs a recommender may require."""

    NONE = 0
    USER_ATTRIBUTES = enum.auto()
    ITEM_ATTRIBUTES = enum.auto()
    USER_RELATIONS = enum.auto()
    ITEM_RELATIONS = enum.auto()


# ---------------------------------------------------------------------------
# Parsed command-line state
# ---------------------------------------------------------------------------

@dataclass
class DriverState:
    """All configuration values for one run of a recommender program.

    Path fields are ``None`` when the flag was not given; an empty string
    is a value the user supplied.
    """

    # paths
    training_file: str | None = None
    test_file: str | None = None
    data_dir: str = ""
    user_attributes_file: str | None = None
    item_attributes_file: str | None = None
    user_relations_file: str | None = None
    item_relations_file: str | None = None
    save_model_file: str | None = None
    load_model_file: str | None = None
    save_user_mapping_file: str | None = None
    save_item_mapping_file: str | None = None
    load_user_mapping_file: str | None = None
    load_item_mapping_file: str | None = None
    prediction_file: str | None = None

    # recommender selection
    method: str | None = None
    recommender_options: str = ""

    # execution controls
    compute_fit: bool = False
    no_id_mapping: bool = False
    random_seed: int | None = None
    cross_validation: int = 0
    test_ratio: float = 0.0

    # iteration search
    max_iter: int = 100
    measure: str | None = None
    epsilon: float = 0.0
    cutoff: float = math.inf
    find_iter: int = 0

    # ID mappings and side data
    user_mapping: EntityMapping = field(default_factory=EntityMapping)
    item_mapping: EntityMapping = field(default_factory=EntityMapping)
    user_attributes: SparseBooleanMatrix | None = None
    item_attributes: SparseBooleanMatrix | None = None

    def resolve_path(self, path: str | None) -> Path | None:
        """Interpret *path* relative to ``data_dir``.

        Absolute paths, and every path when no data directory was given,
        are returned unchanged.
        """
        if path is None:
            return None
        candidate = Path(path)
        if not self.data_dir or candidate.is_absolute():
            return candidate
        return Path(self.data_dir) / candidate


# ---------------------------------------------------------------------------
# Per-run configuration handed to recommender construction
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunConfig:
    """Explicit randomness source for downstream recommenders.

    Built exactly once by the program, after parsing and before
    validation.  Recommenders draw from :attr:`rng` instead of seeding a
    process-wide generator themselves.
    """

    random_seed: int | None
    """Seed given with ``--random-seed``, or ``None`` when unset."""

    rng: np.random.Generator
    """Generator seeded from :attr:`random_seed`."""

    @classmethod
    def from_seed(cls, random_seed: int | None) -> RunConfig:
        return cls(random_seed=random_seed, rng=np.random.default_rng(random_seed))

    @property
    def seeded(self) -> bool:
        return self.random_seed is not None
