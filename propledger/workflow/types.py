"""Activity input/output types for the property registry.

All types: @final @dataclass(frozen=True, slots=True), built from plain
str / int / datetime fields so Temporal's default JSON converter carries
them without a custom payload converter.

Every input carries the caller token and submission time set by the
authentication boundary. Every output has an optional error string: a
failed invocation is a normal activity result, not an activity failure,
so Temporal does not retry it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import final

from propledger.registry.records import DETAIL_FIELDS, SaleDetails, SaleTransaction

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class CreateTransactionInput:
    """CreateTransaction arguments. Field values are passed through unvalidated."""

    caller_identity: str
    submitted_at: datetime | None
    registry_entry: str
    buyer_national_id: str
    buyer_first_name: str
    buyer_last_name: str
    seller_national_id: str
    seller_first_name: str
    seller_last_name: str
    agent_id: str
    document_name: str

    def details(self) -> SaleDetails:
        return SaleDetails(**{attr: getattr(self, attr) for attr, _ in DETAIL_FIELDS})


@final
@dataclass(frozen=True, slots=True)
class TransactionIdInput:
    """GetTransaction / DeleteTransaction arguments."""

    caller_identity: str
    submitted_at: datetime | None
    transaction_id: int


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class TransactionView:
    """A SaleTransaction flattened for the wire; acquisition_date is YYYY-MM-DD."""

    id: int
    registry_entry: str
    buyer_national_id: str
    buyer_first_name: str
    buyer_last_name: str
    seller_national_id: str
    seller_first_name: str
    seller_last_name: str
    agent_id: str
    acquisition_date: str
    document_name: str
    created_by: str

    @staticmethod
    def from_record(record: SaleTransaction) -> TransactionView:
        return TransactionView(
            id=record.id,
            acquisition_date=record.acquisition_date.isoformat(),
            created_by=record.created_by,
            **{attr: getattr(record, attr) for attr, _ in DETAIL_FIELDS},
        )


@final
@dataclass(frozen=True, slots=True)
class CreateTransactionOutput:
    transaction_id: int | None = None
    error: str | None = None


@final
@dataclass(frozen=True, slots=True)
class GetTransactionOutput:
    transaction: TransactionView | None = None
    error: str | None = None


@final
@dataclass(frozen=True, slots=True)
class DeleteTransactionOutput:
    deleted: bool = False
    error: str | None = None
