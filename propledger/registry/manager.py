"""Transaction record lifecycle: create, get, delete.

State machine per id: nonexistent -> active (create) -> deleted (delete).
There is no update; records are write-once. Only the creator may delete.

All methods operate on the StateStore of the current invocation and return
Ok | Err. They never commit: committing or aborting is the invocation
runner's job, so a failed create leaves neither counter nor record behind.
"""

from __future__ import annotations

from typing import final

from propledger.core.errors import (
    AuthorizationError,
    FormatError,
    IdentityError,
    NotFoundError,
    StoreError,
)
from propledger.core.result import Err, Ok
from propledger.core.types import UtcDatetime
from propledger.infra.config import RegistryConfig
from propledger.infra.protocols import IdentityProvider, StateStore
from propledger.registry.allocator import IdAllocator
from propledger.registry.records import (
    SaleDetails,
    SaleTransaction,
    decode_record,
    encode_record,
)

type CreateError = StoreError | FormatError | IdentityError
type GetError = NotFoundError | StoreError | FormatError
type DeleteError = GetError | IdentityError | AuthorizationError


@final
class TransactionRecordManager:
    """Builds, stores, fetches and removes sale records for one invocation."""

    def __init__(
        self,
        store: StateStore,
        identity: IdentityProvider,
        config: RegistryConfig | None = None,
    ) -> None:
        self._store = store
        self._identity = identity
        self._config = config if config is not None else RegistryConfig()
        self._allocator = IdAllocator(store, self._config)

    def create_transaction(self, details: SaleDetails) -> Ok[int] | Err[CreateError]:
        """Allocate an id and persist a new record created by the caller.

        1. Invocation timestamp and caller identity from the host
        2. Next id from the counter
        3. Record with acquisition_date = UTC day of the timestamp
        4. Canonical bytes written under the record key
        """
        match self._identity.invocation_timestamp():
            case Err(error):
                return Err(error.with_context("create_transaction"))
            case Ok(timestamp):
                pass

        match self._identity.caller_identity():
            case Err(error):
                return Err(error.with_context("create_transaction"))
            case Ok(caller):
                pass

        match self._allocator.allocate_next_id():
            case Err(error):
                return Err(error.with_context("create_transaction"))
            case Ok(transaction_id):
                pass

        record = SaleTransaction.build(transaction_id, details, timestamp, caller.value)
        key = self._config.record_key(transaction_id)
        match encode_record(record):
            case Err(detail):
                return Err(FormatError(
                    message=f"create_transaction {transaction_id}: cannot encode record: {detail}",
                    code="ENCODE_FAILED",
                    timestamp=UtcDatetime.now(),
                    source="registry.manager.TransactionRecordManager.create_transaction",
                    key=key,
                    raw="",
                ))
            case Ok(payload):
                pass

        match self._store.put(key, payload):
            case Err(error):
                return Err(error.with_context(f"create_transaction {transaction_id}"))
            case Ok():
                return Ok(transaction_id)

    def get_transaction(self, transaction_id: int) -> Ok[SaleTransaction] | Err[GetError]:
        """Read the record for transaction_id. Absence is NotFoundError."""
        key = self._config.record_key(transaction_id)
        match self._store.get(key):
            case Err(error):
                return Err(error.with_context(f"get_transaction {transaction_id}"))
            case Ok(None):
                return Err(NotFoundError(
                    message=f"No transaction with id {transaction_id}",
                    code="NOT_FOUND",
                    timestamp=UtcDatetime.now(),
                    source="registry.manager.TransactionRecordManager.get_transaction",
                    transaction_id=transaction_id,
                ))
            case Ok(raw):
                pass

        match decode_record(key, raw):
            case Err(error):
                return Err(error.with_context(f"get_transaction {transaction_id}"))
            case Ok(record) if record.id != transaction_id:
                return Err(FormatError(
                    message=(
                        f"get_transaction {transaction_id}: record under {key!r} "
                        f"carries id {record.id}"
                    ),
                    code="ID_MISMATCH",
                    timestamp=UtcDatetime.now(),
                    source="registry.manager.TransactionRecordManager.get_transaction",
                    key=key,
                    raw=repr(raw[:80]),
                ))
            case Ok(record):
                return Ok(record)

    def delete_transaction(self, transaction_id: int) -> Ok[None] | Err[DeleteError]:
        """Remove the record, but only for the caller that created it.

        The id counter is left alone: deleted ids are never handed out again.
        """
        match self.get_transaction(transaction_id):
            case Err() as e:
                return e
            case Ok(record):
                pass

        match self._identity.caller_identity():
            case Err(error):
                return Err(error.with_context(f"delete_transaction {transaction_id}"))
            case Ok(caller):
                pass

        if caller.value != record.created_by:
            return Err(AuthorizationError(
                message=f"Only the creator may delete transaction {transaction_id}",
                code="NOT_CREATOR",
                timestamp=UtcDatetime.now(),
                source="registry.manager.TransactionRecordManager.delete_transaction",
                transaction_id=transaction_id,
                caller=caller.value,
            ))

        match self._store.delete(self._config.record_key(transaction_id)):
            case Err(error):
                return Err(error.with_context(f"delete_transaction {transaction_id}"))
            case Ok():
                return Ok(None)
