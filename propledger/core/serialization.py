"""Canonical serialization for ledger values.

canonical_bytes(obj) -> Result[bytes, str]: deterministic JSON bytes.
parse_json_object(raw) -> Result[dict, str]: strict inverse for objects.

Canonical form: sorted keys, no whitespace, UTF-8, non-ASCII kept as-is.
Two encodings of equal values are byte-identical, so a record written twice
produces the same ledger write set. Only flat objects are supported: str
keys with str, int or date values, which is all a stored record carries.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from propledger.core.result import Err, Ok


def _to_field(value: object) -> str | int:
    """Convert one field value to its JSON-compatible form."""
    # bool is a subclass of int and has no place in a record
    if isinstance(value, bool):
        msg = "Cannot serialize bool"
        raise TypeError(msg)
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, date):
        return value.isoformat()
    msg = f"Cannot serialize {type(value).__name__}"
    raise TypeError(msg)


def canonical_bytes(obj: object) -> Ok[bytes] | Err[str]:
    """Convert a flat str-keyed dict to canonical JSON bytes. Never raises."""
    if not isinstance(obj, dict):
        return Err(
            "Unsupported type in canonical serialization: "
            f"expected dict, got {type(obj).__name__}"
        )
    try:
        serializable = {str(k): _to_field(v) for k, v in obj.items()}
    except TypeError as e:
        return Err(f"Unsupported type in canonical serialization: {e}")
    return Ok(
        json.dumps(
            serializable, sort_keys=True, separators=(",", ":"), ensure_ascii=False,
        ).encode("utf-8")
    )


def parse_json_object(raw: bytes) -> Ok[dict[str, Any]] | Err[str]:
    """Decode UTF-8 JSON bytes that must hold a single object."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        return Err(f"not valid UTF-8: {e}")
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(f"not valid JSON: {e}")
    if not isinstance(value, dict):
        return Err(f"expected JSON object, got {type(value).__name__}")
    return Ok(value)
