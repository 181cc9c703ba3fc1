"""Transaction id allocation over a single ledger counter key.

Read-modify-write of the counter runs inside the caller's invocation. The
ledger's read-set validation is what keeps two concurrent creates from both
reading the same value and committing; IdAllocator itself holds no lock.
"""

from __future__ import annotations

import re
from typing import final

from propledger.core.errors import FormatError, StoreError
from propledger.core.result import Err, Ok
from propledger.core.types import UtcDatetime
from propledger.infra.config import RegistryConfig
from propledger.infra.protocols import StateStore

_COUNTER_PATTERN = re.compile(rb"[0-9]+")


@final
class IdAllocator:
    """Hands out 1, 2, 3, ... from the counter stored under config.counter_key.

    Absent counter means 0. The counter is only ever incremented; deleting a
    record never gives its id back.
    """

    def __init__(self, store: StateStore, config: RegistryConfig) -> None:
        self._store = store
        self._config = config

    def _corrupt(self, key: str, raw: bytes, detail: str) -> Err[FormatError]:
        return Err(FormatError(
            message=f"Id counter under {key!r} {detail}",
            code="CORRUPT_COUNTER",
            timestamp=UtcDatetime.now(),
            source="registry.allocator.IdAllocator.current",
            key=key,
            raw=repr(raw[:80]),
        ))

    def current(self) -> Ok[int] | Err[StoreError | FormatError]:
        """Last allocated id (0 if none), without allocating."""
        key = self._config.counter_key
        match self._store.get(key):
            case Err(error):
                return Err(error.with_context("reading id counter"))
            case Ok(None):
                return Ok(0)
            case Ok(raw):
                if _COUNTER_PATTERN.fullmatch(raw) is None:
                    return self._corrupt(key, raw, "is not a decimal integer")
                try:
                    return Ok(int(raw))
                except ValueError as e:
                    # int() refuses digit strings beyond sys.get_int_max_str_digits()
                    return self._corrupt(key, raw, f"cannot be converted: {e}")

    def allocate_next_id(self) -> Ok[int] | Err[StoreError | FormatError]:
        """Increment the counter and return the new value."""
        match self.current():
            case Ok(value):
                next_id = value + 1
            case Err(FormatError()) if self._config.reset_corrupt_counter:
                next_id = 1
            case Err() as e:
                return e

        match self._store.put(self._config.counter_key, str(next_id).encode("ascii")):
            case Err(error):
                return Err(error.with_context("updating id counter"))
            case Ok():
                return Ok(next_id)
