"""Invocation runner: one registry operation, one all-or-nothing ledger commit.

run_invocation() opens a LedgerInvocation, hands it to the operation as its
StateStore, and then:
  - Err from the operation  -> abort, nothing is written
  - Ok, read-only operation -> abort (no write set to commit)
  - Ok otherwise            -> commit; a commit conflict becomes the result

PropertyRegistry wraps the three record operations in that runner. This is
the in-process equivalent of submitting a transaction to the host ledger.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import final

from propledger.core.errors import StoreError
from propledger.core.result import Err, Ok
from propledger.infra.config import RegistryConfig
from propledger.infra.protocols import IdentityProvider, Ledger, StateStore
from propledger.registry.manager import (
    CreateError,
    DeleteError,
    GetError,
    TransactionRecordManager,
)
from propledger.registry.records import SaleDetails, SaleTransaction


def run_invocation[T, E](
    ledger: Ledger,
    operation: Callable[[StateStore], Ok[T] | Err[E]],
    *,
    read_only: bool = False,
) -> Ok[T] | Err[E | StoreError]:
    """Run operation inside a fresh invocation and commit or abort it."""
    invocation = ledger.begin()
    try:
        result = operation(invocation)
    except BaseException:
        invocation.abort()
        raise

    if isinstance(result, Err) or read_only:
        invocation.abort()
        return result

    match invocation.commit():
        case Err(error):
            return Err(error.with_context("commit"))
        case Ok():
            return result


@final
class PropertyRegistry:
    """Entry point for CreateTransaction / GetTransaction / DeleteTransaction."""

    def __init__(self, ledger: Ledger, config: RegistryConfig | None = None) -> None:
        self._ledger = ledger
        self._config = config if config is not None else RegistryConfig()

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def _manager(
        self, store: StateStore, identity: IdentityProvider,
    ) -> TransactionRecordManager:
        return TransactionRecordManager(store, identity, self._config)

    def create_transaction(
        self, identity: IdentityProvider, details: SaleDetails,
    ) -> Ok[int] | Err[CreateError]:
        return run_invocation(
            self._ledger,
            lambda store: self._manager(store, identity).create_transaction(details),
        )

    def get_transaction(
        self, identity: IdentityProvider, transaction_id: int,
    ) -> Ok[SaleTransaction] | Err[GetError]:
        return run_invocation(
            self._ledger,
            lambda store: self._manager(store, identity).get_transaction(transaction_id),
            read_only=True,
        )

    def delete_transaction(
        self, identity: IdentityProvider, transaction_id: int,
    ) -> Ok[None] | Err[DeleteError]:
        return run_invocation(
            self._ledger,
            lambda store: self._manager(store, identity).delete_transaction(transaction_id),
        )
