"""In-memory ledger implementing the Ledger / LedgerInvocation protocols.

Used by the test suite and by the local worker. Mirrors the host ledger's
optimistic concurrency: each invocation records the version of every key it
reads, and commit() is rejected if any of those keys changed since. Commits
are applied under one lock, so they are atomic with respect to each other.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import final

from propledger.core.errors import StoreError
from propledger.core.result import Err, Ok
from propledger.core.types import UtcDatetime


def _store_error(operation: str, key: str, detail: str, code: str = "STORE_ERROR") -> StoreError:
    """Helper to construct StoreError with consistent formatting."""
    return StoreError(
        message=detail,
        code=code,
        timestamp=UtcDatetime.now(),
        source=f"memory_adapter.{operation}",
        operation=operation,
        key=key,
    )


class InvocationState(Enum):
    OPEN = "Open"
    COMMITTED = "Committed"
    ABORTED = "Aborted"


@final
class InMemoryLedger:
    """Versioned key space. Deleted keys keep their version.

    A tombstone version stays in _versions so that an invocation which read a
    key before another invocation deleted it still fails validation on
    commit. _versions therefore only grows.
    """

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._versions: dict[str, int] = {}
        self._clock = 0
        self._lock = threading.Lock()

    def begin(self) -> InMemoryInvocation:
        return InMemoryInvocation(self)

    def _read(self, key: str) -> tuple[bytes | None, int]:
        with self._lock:
            return self._data.get(key), self._versions.get(key, 0)

    def _apply(
        self,
        read_versions: dict[str, int],
        writes: dict[str, bytes | None],
    ) -> Ok[None] | Err[StoreError]:
        with self._lock:
            for key, seen in read_versions.items():
                current = self._versions.get(key, 0)
                if current != seen:
                    return Err(_store_error(
                        "commit", key,
                        f"Read conflict on {key!r}: read version {seen}, now {current}",
                        code="MVCC_READ_CONFLICT",
                    ))
            self._clock += 1
            for key, value in writes.items():
                if value is None:
                    self._data.pop(key, None)
                else:
                    self._data[key] = value
                self._versions[key] = self._clock
        return Ok(None)

    def count(self) -> int:
        """Test-only helper."""
        with self._lock:
            return len(self._data)

    def keys(self) -> tuple[str, ...]:
        """Test-only helper."""
        with self._lock:
            return tuple(sorted(self._data))

    def raw(self, key: str) -> bytes | None:
        """Test-only helper: committed value, bypassing any invocation."""
        with self._lock:
            return self._data.get(key)

    def seed(self, key: str, value: bytes) -> None:
        """Test-only helper: write committed state directly."""
        with self._lock:
            self._clock += 1
            self._data[key] = value
            self._versions[key] = self._clock


@final
class InMemoryInvocation:
    """Buffered unit of work over an InMemoryLedger."""

    def __init__(self, ledger: InMemoryLedger) -> None:
        self._ledger = ledger
        self._writes: dict[str, bytes | None] = {}
        self._read_versions: dict[str, int] = {}
        self._state = InvocationState.OPEN

    @property
    def state(self) -> InvocationState:
        return self._state

    def _closed(self, operation: str, key: str) -> Err[StoreError] | None:
        if self._state is InvocationState.OPEN:
            return None
        return Err(_store_error(
            operation, key,
            f"Invocation already {self._state.value.lower()}",
            code="INVOCATION_CLOSED",
        ))

    def get(self, key: str) -> Ok[bytes | None] | Err[StoreError]:
        if (closed := self._closed("get", key)) is not None:
            return closed
        if key in self._writes:
            return Ok(self._writes[key])
        value, version = self._ledger._read(key)
        self._read_versions.setdefault(key, version)
        return Ok(value)

    def put(self, key: str, value: bytes) -> Ok[None] | Err[StoreError]:
        if (closed := self._closed("put", key)) is not None:
            return closed
        self._writes[key] = value
        return Ok(None)

    def delete(self, key: str) -> Ok[None] | Err[StoreError]:
        if (closed := self._closed("delete", key)) is not None:
            return closed
        self._writes[key] = None
        return Ok(None)

    def commit(self) -> Ok[None] | Err[StoreError]:
        if (closed := self._closed("commit", "")) is not None:
            return closed
        result = self._ledger._apply(self._read_versions, self._writes)
        match result:
            case Ok():
                self._state = InvocationState.COMMITTED
            case Err():
                self._state = InvocationState.ABORTED
        self._writes = {}
        return result

    def abort(self) -> None:
        if self._state is InvocationState.OPEN:
            self._state = InvocationState.ABORTED
        self._writes = {}

    def pending_keys(self) -> tuple[str, ...]:
        """Test-only helper: keys written but not yet committed."""
        return tuple(sorted(self._writes))
