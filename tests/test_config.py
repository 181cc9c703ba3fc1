"""Tests for propledger.infra.config: key layout and environment loading."""

from __future__ import annotations

import dataclasses

import pytest

from propledger.core.result import Err, Ok
from propledger.infra.config import (
    RegistryConfig,
    TemporalWorkerConfig,
    load_config,
)


class TestRegistryConfig:
    def test_defaults(self) -> None:
        cfg = RegistryConfig()
        assert cfg.counter_key == "ID_COUNTER"
        assert cfg.record_key_prefix == "TRANSACTION"
        assert cfg.reset_corrupt_counter is False

    def test_record_key(self) -> None:
        assert RegistryConfig().record_key(42) == "TRANSACTION42"

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RegistryConfig().counter_key = "X"  # type: ignore[misc]

    def test_create_valid(self) -> None:
        result = RegistryConfig.create(counter_key="SEQ", record_key_prefix="SALE_")
        assert isinstance(result, Ok)
        assert result.value.record_key(7) == "SALE_7"

    @pytest.mark.parametrize(
        ("counter_key", "prefix"),
        [("", "TRANSACTION"), ("ID_COUNTER", ""), ("TX0", "TX"), ("TRANSACTION12", "TRANSACTION")],
    )
    def test_create_rejects_bad_layout(self, counter_key: str, prefix: str) -> None:
        assert isinstance(RegistryConfig.create(counter_key, prefix), Err)

    def test_counter_key_sharing_prefix_without_digits_is_fine(self) -> None:
        assert isinstance(RegistryConfig.create("TRANSACTION_COUNTER", "TRANSACTION"), Ok)


class TestLoadConfig:
    def test_empty_environment_gives_defaults(self) -> None:
        result = load_config({})
        assert isinstance(result, Ok)
        assert result.value.registry == RegistryConfig()
        assert result.value.worker == TemporalWorkerConfig()

    def test_reads_all_variables(self) -> None:
        result = load_config({
            "PROPLEDGER_COUNTER_KEY": "SEQ",
            "PROPLEDGER_RECORD_PREFIX": "SALE",
            "PROPLEDGER_RESET_CORRUPT_COUNTER": "true",
            "PROPLEDGER_TEMPORAL_HOST": "temporal:7233",
            "PROPLEDGER_TEMPORAL_NAMESPACE": "registry",
            "PROPLEDGER_TASK_QUEUE": "sales",
        })
        assert isinstance(result, Ok)
        cfg = result.value
        assert cfg.registry == RegistryConfig("SEQ", "SALE", True)
        assert cfg.worker == TemporalWorkerConfig("temporal:7233", "registry", "sales")

    def test_bad_boolean(self) -> None:
        result = load_config({"PROPLEDGER_RESET_CORRUPT_COUNTER": "maybe"})
        assert isinstance(result, Err)
        assert "PROPLEDGER_RESET_CORRUPT_COUNTER" in result.error

    def test_colliding_layout(self) -> None:
        result = load_config({"PROPLEDGER_COUNTER_KEY": "TRANSACTION1"})
        assert isinstance(result, Err)
