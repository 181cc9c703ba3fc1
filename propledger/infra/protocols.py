"""Infrastructure protocol definitions for the property registry.

Registry code depends on these abstractions; the host ledger and the
authentication boundary implement them. The two meet only in the
invocation runner and the activity layer.

All protocols return Ok[T] | Err[...]. Infrastructure failures are visible
values in the type system, never invisible exceptions.

Precondition on every Ledger implementation: two invocations whose
read/write sets overlap on a key must not both commit against the same
version of that key. Id uniqueness depends on it; the registry does no
locking of its own.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from propledger.core.errors import IdentityError, StoreError
from propledger.core.result import Err, Ok
from propledger.core.types import CallerIdentity, UtcDatetime


@runtime_checkable
class StateStore(Protocol):
    """Key-value view of the ledger world state.

    Invariants:
      - get() returns Ok(None) for an absent key, never Ok(b"").
      - reads observe earlier put()/delete() of the same invocation.
    """

    def get(
        self, key: str,
    ) -> Ok[bytes | None] | Err[StoreError]: ...

    def put(
        self, key: str, value: bytes,
    ) -> Ok[None] | Err[StoreError]: ...

    def delete(
        self, key: str,
    ) -> Ok[None] | Err[StoreError]: ...


@runtime_checkable
class LedgerInvocation(StateStore, Protocol):
    """One all-or-nothing unit of work against the ledger.

    Writes are buffered until commit(). After commit() or abort() every
    further call returns Err[StoreError].
    """

    def commit(self) -> Ok[None] | Err[StoreError]: ...

    def abort(self) -> None: ...


@runtime_checkable
class Ledger(Protocol):
    """Transactional ledger: hands out invocations, serializes their commits."""

    def begin(self) -> LedgerInvocation: ...


@runtime_checkable
class IdentityProvider(Protocol):
    """Who is calling, and when, as agreed by the host for one invocation."""

    def caller_identity(self) -> Ok[CallerIdentity] | Err[IdentityError]: ...

    def invocation_timestamp(self) -> Ok[UtcDatetime] | Err[IdentityError]: ...
