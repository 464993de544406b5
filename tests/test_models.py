"""Tests for domain models (core/models.py)."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from rec_driver.core.models import Capability, DriverState, RunConfig
from rec_driver.core.protocols import Recommender


class TestCapability:
    def test_none_contains_nothing(self) -> None:
        assert Capability.USER_ATTRIBUTES not in Capability.NONE

    def test_combination(self) -> None:
        caps = Capability.USER_ATTRIBUTES | Capability.ITEM_RELATIONS
        assert Capability.USER_ATTRIBUTES in caps
        assert Capability.ITEM_RELATIONS in caps
        assert Capability.ITEM_ATTRIBUTES not in caps

    def test_protocol_is_structural(self) -> None:
        class _Rec:
            capabilities = Capability.NONE

        assert isinstance(_Rec(), Recommender)


class TestDriverState:
    def test_mappings_are_per_instance(self) -> None:
        first, second = DriverState(), DriverState()
        first.user_mapping.to_internal("u1")
        assert len(second.user_mapping) == 0

    def test_attributes_unset_by_default(self) -> None:
        state = DriverState()
        assert state.user_attributes is None
        assert state.item_attributes is None

    def test_resolve_without_data_dir(self) -> None:
        assert DriverState().resolve_path("train.txt") == Path("train.txt")

    def test_resolve_with_data_dir(self) -> None:
        state = DriverState(data_dir="data/ml-100k")
        assert state.resolve_path("u1.base") == Path("data/ml-100k/u1.base")

    def test_resolve_absolute(self, tmp_path: Path) -> None:
        target = tmp_path / "train.txt"
        state = DriverState(data_dir="data")
        assert state.resolve_path(str(target)) == target

    def test_resolve_none(self) -> None:
        assert DriverState(data_dir="data").resolve_path(None) is None


class TestRunConfig:
    def test_is_frozen(self) -> None:
        config = RunConfig.from_seed(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.random_seed = 2  # type: ignore[misc]

    def test_unseeded(self) -> None:
        config = RunConfig.from_seed(None)
        assert config.seeded is False
        assert 0.0 <= config.rng.random() < 1.0

    def test_seed_is_reproducible(self) -> None:
        assert RunConfig.from_seed(9).rng.integers(1000) == RunConfig.from_seed(9).rng.integers(1000)
