"""Tests for propledger.registry.manager: record create/get/delete."""

from __future__ import annotations

import json
from datetime import UTC, date, datetime

from propledger.core.errors import (
    AuthorizationError,
    FormatError,
    IdentityError,
    NotFoundError,
    StoreError,
)
from propledger.core.result import Err, Ok, unwrap
from propledger.core.types import UtcDatetime
from propledger.infra.config import RegistryConfig
from propledger.infra.identity import StaticIdentityProvider
from propledger.infra.memory_adapter import InMemoryInvocation, InMemoryLedger
from propledger.registry.manager import TransactionRecordManager
from propledger.registry.records import SaleDetails

_TS = datetime(2024, 11, 5, 16, 45, tzinfo=UTC)

_DETAILS = SaleDetails(
    registry_entry="P-00981",
    buyer_national_id="70112233",
    buyer_first_name="Rosa",
    buyer_last_name="Huamán",
    seller_national_id="40998877",
    seller_first_name="Carlos",
    seller_last_name="Vega",
    agent_id="EMP-12",
    document_name="escritura-00981.pdf",
)


def _manager(
    inv: InMemoryInvocation,
    caller: str = "alice",
    submitted_at: datetime | None = _TS,
    config: RegistryConfig | None = None,
) -> TransactionRecordManager:
    return TransactionRecordManager(
        inv, StaticIdentityProvider(caller=caller, submitted_at=submitted_at), config,
    )


class _FailingPutStore:
    """Delegates reads to an invocation; every write fails for keys with prefix."""

    def __init__(self, inner: InMemoryInvocation, prefix: str) -> None:
        self._inner = inner
        self._prefix = prefix

    def get(self, key: str) -> Ok[bytes | None] | Err[StoreError]:
        return self._inner.get(key)

    def put(self, key: str, value: bytes) -> Ok[None] | Err[StoreError]:
        if key.startswith(self._prefix):
            return Err(StoreError(
                message="write rejected", code="STORE_ERROR", timestamp=UtcDatetime.now(),
                source="test", operation="put", key=key,
            ))
        return self._inner.put(key, value)

    def delete(self, key: str) -> Ok[None] | Err[StoreError]:
        return self._inner.delete(key)


class TestCreate:
    def test_returns_first_id(self) -> None:
        inv = InMemoryLedger().begin()
        assert _manager(inv).create_transaction(_DETAILS) == Ok(1)

    def test_writes_counter_and_one_record(self) -> None:
        inv = InMemoryLedger().begin()
        _manager(inv).create_transaction(_DETAILS)
        assert inv.pending_keys() == ("ID_COUNTER", "TRANSACTION1")

    def test_stored_bytes_use_wire_names(self) -> None:
        inv = InMemoryLedger().begin()
        _manager(inv, caller="x509::alice").create_transaction(_DETAILS)
        stored = json.loads(unwrap(inv.get("TRANSACTION1")))
        assert stored["registryEntry"] == "P-00981"
        assert stored["acquisitionDate"] == "2024-11-05"
        assert stored["createdBy"] == "x509::alice"

    def test_missing_timestamp(self) -> None:
        inv = InMemoryLedger().begin()
        result = _manager(inv, submitted_at=None).create_transaction(_DETAILS)
        assert isinstance(result, Err)
        assert isinstance(result.error, IdentityError)
        assert result.error.message.startswith("create_transaction")
        assert inv.pending_keys() == ()

    def test_missing_caller(self) -> None:
        inv = InMemoryLedger().begin()
        result = _manager(inv, caller="").create_transaction(_DETAILS)
        assert isinstance(result, Err)
        assert isinstance(result.error, IdentityError)
        assert inv.pending_keys() == ()

    def test_corrupt_counter(self) -> None:
        ledger = InMemoryLedger()
        ledger.seed("ID_COUNTER", b"NaN")
        inv = ledger.begin()
        result = _manager(inv).create_transaction(_DETAILS)
        assert isinstance(result, Err)
        assert isinstance(result.error, FormatError)
        assert inv.pending_keys() == ()

    def test_counter_past_int_digit_limit(self) -> None:
        ledger = InMemoryLedger()
        ledger.seed("ID_COUNTER", b"9" * 5000)
        inv = ledger.begin()
        result = _manager(inv).create_transaction(_DETAILS)
        assert isinstance(result, Err)
        assert isinstance(result.error, FormatError)
        assert result.error.code == "CORRUPT_COUNTER"
        assert inv.pending_keys() == ()

    def test_record_write_failure(self) -> None:
        inv = InMemoryLedger().begin()
        store = _FailingPutStore(inv, "TRANSACTION")
        mgr = TransactionRecordManager(
            store, StaticIdentityProvider(caller="alice", submitted_at=_TS),
        )
        result = mgr.create_transaction(_DETAILS)
        assert isinstance(result, Err)
        assert isinstance(result.error, StoreError)
        assert "create_transaction 1" in result.error.message

    def test_custom_key_layout(self) -> None:
        inv = InMemoryLedger().begin()
        cfg = RegistryConfig(counter_key="SEQ", record_key_prefix="SALE-")
        _manager(inv, config=cfg).create_transaction(_DETAILS)
        assert inv.pending_keys() == ("SALE-1", "SEQ")


class TestGet:
    def test_after_create(self) -> None:
        inv = InMemoryLedger().begin()
        mgr = _manager(inv)
        tx_id = unwrap(mgr.create_transaction(_DETAILS))
        rec = unwrap(mgr.get_transaction(tx_id))
        assert rec.id == tx_id
        assert rec.details == _DETAILS
        assert rec.acquisition_date == date(2024, 11, 5)
        assert rec.created_by == "alice"

    def test_never_created(self) -> None:
        inv = InMemoryLedger().begin()
        result = _manager(inv).get_transaction(99)
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)
        assert result.error.transaction_id == 99

    def test_get_needs_no_identity(self) -> None:
        inv = InMemoryLedger().begin()
        unwrap(_manager(inv).create_transaction(_DETAILS))
        assert isinstance(_manager(inv, caller="", submitted_at=None).get_transaction(1), Ok)

    def test_corrupt_record(self) -> None:
        ledger = InMemoryLedger()
        ledger.seed("TRANSACTION1", b"{broken")
        result = _manager(ledger.begin()).get_transaction(1)
        assert isinstance(result, Err)
        assert isinstance(result.error, FormatError)
        assert result.error.message.startswith("get_transaction 1")

    def test_record_under_wrong_key(self) -> None:
        ledger = InMemoryLedger()
        inv = ledger.begin()
        unwrap(_manager(inv).create_transaction(_DETAILS))
        inv.put("TRANSACTION7", unwrap(inv.get("TRANSACTION1")))
        result = _manager(inv).get_transaction(7)
        assert isinstance(result, Err)
        assert result.error.code == "ID_MISMATCH"


class TestDelete:
    def test_creator_deletes(self) -> None:
        inv = InMemoryLedger().begin()
        mgr = _manager(inv, caller="alice")
        tx_id = unwrap(mgr.create_transaction(_DETAILS))
        assert mgr.delete_transaction(tx_id) == Ok(None)
        result = mgr.get_transaction(tx_id)
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)

    def test_other_caller_refused(self) -> None:
        inv = InMemoryLedger().begin()
        tx_id = unwrap(_manager(inv, caller="alice").create_transaction(_DETAILS))
        before = unwrap(inv.get("TRANSACTION1"))
        result = _manager(inv, caller="bob").delete_transaction(tx_id)
        assert isinstance(result, Err)
        assert isinstance(result.error, AuthorizationError)
        assert result.error.caller == "bob"
        assert inv.get("TRANSACTION1") == Ok(before)

    def test_identity_compared_exactly(self) -> None:
        inv = InMemoryLedger().begin()
        unwrap(_manager(inv, caller="alice").create_transaction(_DETAILS))
        for near in ("Alice", "alice ", " alice"):
            result = _manager(inv, caller=near).delete_transaction(1)
            assert isinstance(result, Err)
            assert isinstance(result.error, AuthorizationError)

    def test_missing_record(self) -> None:
        result = _manager(InMemoryLedger().begin()).delete_transaction(4)
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)

    def test_missing_caller(self) -> None:
        inv = InMemoryLedger().begin()
        unwrap(_manager(inv).create_transaction(_DETAILS))
        result = _manager(inv, caller="").delete_transaction(1)
        assert isinstance(result, Err)
        assert isinstance(result.error, IdentityError)

    def test_counter_untouched(self) -> None:
        inv = InMemoryLedger().begin()
        mgr = _manager(inv)
        unwrap(mgr.create_transaction(_DETAILS))
        unwrap(mgr.delete_transaction(1))
        assert inv.get("ID_COUNTER") == Ok(b"1")
        assert mgr.create_transaction(_DETAILS) == Ok(2)
