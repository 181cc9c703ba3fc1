"""Sale transaction record and its ledger encoding.

Wire format: one canonical JSON object per record, camelCase field names.
Records written by earlier deployments used Spanish field names; those are
accepted on read and never written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, final

from propledger.core.errors import FormatError
from propledger.core.result import Err, Ok
from propledger.core.serialization import canonical_bytes, parse_json_object
from propledger.core.types import UtcDatetime

# (attribute, wire name) for the caller-supplied part of a record.
DETAIL_FIELDS: tuple[tuple[str, str], ...] = (
    ("registry_entry", "registryEntry"),
    ("buyer_national_id", "buyerNationalId"),
    ("buyer_first_name", "buyerFirstName"),
    ("buyer_last_name", "buyerLastName"),
    ("seller_national_id", "sellerNationalId"),
    ("seller_first_name", "sellerFirstName"),
    ("seller_last_name", "sellerLastName"),
    ("agent_id", "agentId"),
    ("document_name", "documentName"),
)

LEGACY_FIELD_NAMES: dict[str, str] = {
    "partidaRegistral": "registryEntry",
    "compradorDni": "buyerNationalId",
    "compradorNombre": "buyerFirstName",
    "compradorApellidos": "buyerLastName",
    "vendedorDni": "sellerNationalId",
    "vendedorNombre": "sellerFirstName",
    "vendedorApellidos": "sellerLastName",
    "empleadoId": "agentId",
    "fechaAdquisicion": "acquisitionDate",
    "archivoNombre": "documentName",
}

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_RAW_PREVIEW = 80


@final
@dataclass(frozen=True, slots=True)
class SaleDetails:
    """What the caller supplies for a sale. Values are opaque, never validated."""

    registry_entry: str
    buyer_national_id: str
    buyer_first_name: str
    buyer_last_name: str
    seller_national_id: str
    seller_first_name: str
    seller_last_name: str
    agent_id: str
    document_name: str


@final
@dataclass(frozen=True, slots=True)
class SaleTransaction:
    """A persisted property sale. Immutable once written."""

    id: int
    registry_entry: str
    buyer_national_id: str
    buyer_first_name: str
    buyer_last_name: str
    seller_national_id: str
    seller_first_name: str
    seller_last_name: str
    agent_id: str
    acquisition_date: date
    document_name: str
    created_by: str

    def __post_init__(self) -> None:
        if self.id <= 0:
            raise TypeError(f"SaleTransaction.id must be > 0, got {self.id}")

    @staticmethod
    def build(
        transaction_id: int,
        details: SaleDetails,
        timestamp: UtcDatetime,
        created_by: str,
    ) -> SaleTransaction:
        """Assemble a new record; acquisition date is the UTC day of timestamp."""
        return SaleTransaction(
            id=transaction_id,
            acquisition_date=timestamp.utc_date(),
            created_by=created_by,
            **{attr: getattr(details, attr) for attr, _ in DETAIL_FIELDS},
        )

    @property
    def details(self) -> SaleDetails:
        return SaleDetails(**{attr: getattr(self, attr) for attr, _ in DETAIL_FIELDS})

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {wire: getattr(self, attr) for attr, wire in DETAIL_FIELDS}
        wire["id"] = self.id
        wire["acquisitionDate"] = self.acquisition_date
        wire["createdBy"] = self.created_by
        return wire


def encode_record(record: SaleTransaction) -> Ok[bytes] | Err[str]:
    """Canonical bytes for a record."""
    return canonical_bytes(record.to_wire())


def _format_error(key: str, raw: bytes, detail: str) -> FormatError:
    preview = raw[:_RAW_PREVIEW]
    return FormatError(
        message=f"Corrupt record under {key!r}: {detail}",
        code="CORRUPT_RECORD",
        timestamp=UtcDatetime.now(),
        source="registry.records.decode_record",
        key=key,
        raw=repr(preview) + ("..." if len(raw) > _RAW_PREVIEW else ""),
    )


def _normalise_names(obj: dict[str, Any]) -> dict[str, Any]:
    """Map legacy field names onto current ones; current names win."""
    out = dict(obj)
    for legacy, current in LEGACY_FIELD_NAMES.items():
        if legacy in out:
            value = out.pop(legacy)
            out.setdefault(current, value)
    return out


def decode_record(key: str, raw: bytes) -> Ok[SaleTransaction] | Err[FormatError]:  # noqa: PLR0911
    """Decode stored bytes into a fully populated record, or FormatError."""
    parsed = parse_json_object(raw)
    if isinstance(parsed, Err):
        return Err(_format_error(key, raw, parsed.error))
    fields = _normalise_names(parsed.value)

    tx_id = fields.get("id")
    if isinstance(tx_id, bool) or not isinstance(tx_id, int) or tx_id <= 0:
        return Err(_format_error(key, raw, f"id must be a positive integer, got {tx_id!r}"))

    strings: dict[str, str] = {}
    for attr, wire in (*DETAIL_FIELDS, ("created_by", "createdBy")):
        value = fields.get(wire)
        if not isinstance(value, str):
            return Err(_format_error(key, raw, f"{wire} must be a string, got {value!r}"))
        strings[attr] = value

    raw_date = fields.get("acquisitionDate")
    if not isinstance(raw_date, str) or not _ISO_DATE.fullmatch(raw_date):
        return Err(_format_error(
            key, raw, f"acquisitionDate must be YYYY-MM-DD, got {raw_date!r}",
        ))
    try:
        acquired = date.fromisoformat(raw_date)
    except ValueError as e:
        return Err(_format_error(key, raw, f"acquisitionDate invalid: {e}"))

    return Ok(SaleTransaction(id=tx_id, acquisition_date=acquired, **strings))
