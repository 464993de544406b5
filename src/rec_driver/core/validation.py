"""Cross-field validation of parsed options.

Rules run in a fixed order and the first violation is raised, so a
command line that breaks several rules always produces the same
message.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rec_driver.core.models import Capability, DriverState
from rec_driver.core.protocols import Recommender
from rec_driver.exceptions import UsageError, ValidationError

logger = logging.getLogger(__name__)

# (capability, state field, flag)
_REQUIRED_INPUTS: tuple[tuple[Capability, str, str], ...] = (
    (Capability.USER_ATTRIBUTES, "user_attributes_file", "--user-attributes=FILE"),
    (Capability.ITEM_ATTRIBUTES, "item_attributes_file", "--item-attributes=FILE"),
    (Capability.USER_RELATIONS, "user_relations_file", "--user-relations=FILE"),
    (Capability.ITEM_RELATIONS, "item_relations_file", "--item-relations=FILE"),
)

# (state field, flag) excluded by cross-validation
_CROSS_VALIDATION_EXCLUSIONS: tuple[tuple[str, str], ...] = (
    ("prediction_file", "--prediction-file=FILE"),
    ("save_model_file", "--save-model=FILE"),
    ("load_model_file", "--load-model=FILE"),
)

# (state field, flag) excluded by --no-id-mapping
_MAPPING_FILES: tuple[tuple[str, str], ...] = (
    ("save_user_mapping_file", "--save-user-mapping=FILE"),
    ("save_item_mapping_file", "--save-item-mapping=FILE"),
    ("load_user_mapping_file", "--load-user-mapping=FILE"),
    ("load_item_mapping_file", "--load-item-mapping=FILE"),
)


def check_cross_validation(state: DriverState) -> None:
    if state.cross_validation == 1:
        raise ValidationError("--cross-validation=K requires K to be at least 2.")
    if state.cross_validation < 2:
        return
    if state.test_ratio != 0:
        raise ValidationError(
            "--cross-validation=K and --test-ratio=NUM are mutually exclusive."
        )
    for name, flag in _CROSS_VALIDATION_EXCLUSIONS:
        if getattr(state, name) is not None:
            raise ValidationError(
                f"--cross-validation=K and {flag} are mutually exclusive."
            )


def check_required_inputs(state: DriverState, recommender: Recommender | None) -> None:
    """Require the side-input files the recommender's capabilities name."""
    if recommender is None:
        return
    capabilities = recommender.capabilities
    for capability, name, flag in _REQUIRED_INPUTS:
        if capability in capabilities and getattr(state, name) is None:
            raise ValidationError(f"Recommender expects {flag}.")


def check_id_mapping(state: DriverState) -> None:
    if not state.no_id_mapping:
        return
    for name, flag in _MAPPING_FILES:
        if getattr(state, name) is not None:
            raise ValidationError(
                f"{flag} and --no-id-mapping are mutually exclusive."
            )


def check_extra_args(extra_args: Sequence[str]) -> None:
    if extra_args:
        raise UsageError(f"Did not understand {extra_args[0]}")


def validate(
    state: DriverState,
    recommender: Recommender | None,
    extra_args: Sequence[str] = (),
) -> None:
    """Run every rule in order.

    Raises
    ------
    ValidationError
        On the first violated option constraint.
    UsageError
        If bare arguments are left over.
    """
    check_cross_validation(state)
    check_required_inputs(state, recommender)
    check_id_mapping(state)
    check_extra_args(extra_args)
    logger.debug("options validated")
