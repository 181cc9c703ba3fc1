"""Core value types: UtcDatetime, CallerIdentity.

Both are thin validated wrappers. Naive datetimes are rejected so the
acquisition date is always derived from an unambiguous UTC instant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import final

from propledger.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def parse(raw: datetime) -> Ok[UtcDatetime] | Err[str]:
        """Parse a datetime, rejecting naive values and normalising to UTC."""
        if raw.tzinfo is None:
            return Err("UtcDatetime requires timezone-aware datetime, got naive")
        return Ok(UtcDatetime(value=raw.astimezone(UTC)))

    @staticmethod
    def now() -> UtcDatetime:
        """Current UTC time."""
        return UtcDatetime(value=datetime.now(tz=UTC))

    def utc_date(self) -> date:
        """Calendar day of this instant in UTC."""
        return self.value.astimezone(UTC).date()


@final
@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """Opaque caller token issued by the authentication boundary.

    Never parsed; only compared for exact equality. An empty token means the
    host could not identify the caller and is refused at construction.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise TypeError("CallerIdentity requires non-empty string")

    @staticmethod
    def create(raw: str) -> Ok[CallerIdentity] | Err[str]:
        if not raw:
            return Err("CallerIdentity requires non-empty string")
        return Ok(CallerIdentity(value=raw))
