"""Error value hierarchy: registry operations return these, never raise them.

Every error is a frozen dataclass value that can be pattern-matched,
serialized, and logged. Base class RegistryError, five @final subclasses
matching the failure modes of an invocation:

  StoreError          the ledger read/write failed, or a commit conflicted
  FormatError         stored bytes (counter or record) could not be decoded
  NotFoundError       no record under the requested id
  IdentityError       caller identity or invocation timestamp unavailable
  AuthorizationError  delete attempted by someone other than the creator
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final

from propledger.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class RegistryError:
    """Base error value. NOT @final; has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> RegistryError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        """Serialize to dict with stable keys."""
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }

    def describe(self) -> str:
        """One-line diagnostic for the invocation boundary."""
        return f"{self.code}: {self.message}"


@final
@dataclass(frozen=True, slots=True)
class StoreError(RegistryError):
    """Underlying ledger read, write, delete or commit failed."""

    operation: str
    key: str

    def to_dict(self) -> dict[str, object]:
        return {**RegistryError.to_dict(self), "operation": self.operation, "key": self.key}


@final
@dataclass(frozen=True, slots=True)
class FormatError(RegistryError):
    """Stored bytes are corrupt or unparseable."""

    key: str
    raw: str  # repr of the offending bytes, truncated

    def to_dict(self) -> dict[str, object]:
        return {**RegistryError.to_dict(self), "key": self.key, "raw": self.raw}


@final
@dataclass(frozen=True, slots=True)
class NotFoundError(RegistryError):
    """No record exists for the requested transaction id."""

    transaction_id: int

    def to_dict(self) -> dict[str, object]:
        return {**RegistryError.to_dict(self), "transaction_id": self.transaction_id}


@final
@dataclass(frozen=True, slots=True)
class IdentityError(RegistryError):
    """Host could not supply caller identity or invocation timestamp."""

    operation: str

    def to_dict(self) -> dict[str, object]:
        return {**RegistryError.to_dict(self), "operation": self.operation}


@final
@dataclass(frozen=True, slots=True)
class AuthorizationError(RegistryError):
    """Caller is not the creator of the record it tried to delete."""

    transaction_id: int
    caller: str

    def to_dict(self) -> dict[str, object]:
        return {
            **RegistryError.to_dict(self),
            "transaction_id": self.transaction_id,
            "caller": self.caller,
        }
