"""Registry key layout and worker configuration.

No Temporal client library is imported. Pure configuration data, plus a
loader for the PROPLEDGER_* environment variables.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import final

from propledger.core.result import Err, Ok

# ---------------------------------------------------------------------------
# Ledger key layout
# ---------------------------------------------------------------------------

DEFAULT_COUNTER_KEY: str = "ID_COUNTER"
DEFAULT_RECORD_KEY_PREFIX: str = "TRANSACTION"

# ---------------------------------------------------------------------------
# Temporal
# ---------------------------------------------------------------------------

DEFAULT_TEMPORAL_HOST: str = "localhost:7233"
DEFAULT_NAMESPACE: str = "default"
DEFAULT_TASK_QUEUE: str = "property-registry"

_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off", ""})


@final
@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Where the registry keeps its counter and records in the ledger.

    reset_corrupt_counter restores the historical behaviour of restarting
    the counter at 1 when its stored value is unreadable. That re-issues
    ids already in use, so it stays off unless a deployment must match
    ledgers written that way.
    """

    counter_key: str = DEFAULT_COUNTER_KEY
    record_key_prefix: str = DEFAULT_RECORD_KEY_PREFIX
    reset_corrupt_counter: bool = False

    @staticmethod
    def create(
        counter_key: str = DEFAULT_COUNTER_KEY,
        record_key_prefix: str = DEFAULT_RECORD_KEY_PREFIX,
        reset_corrupt_counter: bool = False,
    ) -> Ok[RegistryConfig] | Err[str]:
        """Validate the key layout: counter and record keys must never collide."""
        if not counter_key:
            return Err("counter_key must be non-empty")
        if not record_key_prefix:
            return Err("record_key_prefix must be non-empty")
        if re.fullmatch(re.escape(record_key_prefix) + r"\d+", counter_key):
            return Err(
                f"counter_key {counter_key!r} collides with record keys "
                f"under prefix {record_key_prefix!r}"
            )
        return Ok(RegistryConfig(
            counter_key=counter_key,
            record_key_prefix=record_key_prefix,
            reset_corrupt_counter=reset_corrupt_counter,
        ))

    def record_key(self, transaction_id: int) -> str:
        """Deterministic ledger key for one transaction record."""
        return f"{self.record_key_prefix}{transaction_id}"


@final
@dataclass(frozen=True, slots=True)
class TemporalWorkerConfig:
    """Connection settings for the activity worker."""

    target_host: str = DEFAULT_TEMPORAL_HOST
    namespace: str = DEFAULT_NAMESPACE
    task_queue: str = DEFAULT_TASK_QUEUE


@final
@dataclass(frozen=True, slots=True)
class PropledgerConfig:
    registry: RegistryConfig
    worker: TemporalWorkerConfig


def _parse_bool(name: str, raw: str) -> Ok[bool] | Err[str]:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return Ok(True)
    if lowered in _FALSE_VALUES:
        return Ok(False)
    return Err(f"{name} must be a boolean, got {raw!r}")


def load_config(environ: Mapping[str, str]) -> Ok[PropledgerConfig] | Err[str]:
    """Build configuration from PROPLEDGER_* variables; unset means default."""
    reset = _parse_bool(
        "PROPLEDGER_RESET_CORRUPT_COUNTER",
        environ.get("PROPLEDGER_RESET_CORRUPT_COUNTER", ""),
    )
    if isinstance(reset, Err):
        return reset

    registry = RegistryConfig.create(
        counter_key=environ.get("PROPLEDGER_COUNTER_KEY", DEFAULT_COUNTER_KEY),
        record_key_prefix=environ.get("PROPLEDGER_RECORD_PREFIX", DEFAULT_RECORD_KEY_PREFIX),
        reset_corrupt_counter=reset.value,
    )
    if isinstance(registry, Err):
        return registry

    worker = TemporalWorkerConfig(
        target_host=environ.get("PROPLEDGER_TEMPORAL_HOST", DEFAULT_TEMPORAL_HOST),
        namespace=environ.get("PROPLEDGER_TEMPORAL_NAMESPACE", DEFAULT_NAMESPACE),
        task_queue=environ.get("PROPLEDGER_TASK_QUEUE", DEFAULT_TASK_QUEUE),
    )
    return Ok(PropledgerConfig(registry=registry.value, worker=worker))
