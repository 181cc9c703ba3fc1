"""Identity provider fed by the authentication boundary.

The boundary (activity input, gateway, test) has already authenticated the
caller; this adapter only hands the token and the submission time to the
registry, refusing to invent either one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import final

from propledger.core.errors import IdentityError
from propledger.core.result import Err, Ok
from propledger.core.types import CallerIdentity, UtcDatetime


def _identity_error(operation: str, detail: str) -> IdentityError:
    return IdentityError(
        message=detail,
        code="IDENTITY_UNAVAILABLE",
        timestamp=UtcDatetime.now(),
        source=f"identity.{operation}",
        operation=operation,
    )


@final
@dataclass(frozen=True, slots=True)
class StaticIdentityProvider:
    """Caller token and invocation time fixed for one invocation."""

    caller: str
    submitted_at: datetime | None

    def caller_identity(self) -> Ok[CallerIdentity] | Err[IdentityError]:
        match CallerIdentity.create(self.caller):
            case Ok(identity):
                return Ok(identity)
            case Err(detail):
                return Err(_identity_error("caller_identity", detail))

    def invocation_timestamp(self) -> Ok[UtcDatetime] | Err[IdentityError]:
        if self.submitted_at is None:
            return Err(_identity_error(
                "invocation_timestamp", "Invocation timestamp not supplied by host",
            ))
        match UtcDatetime.parse(self.submitted_at):
            case Ok(ts):
                return Ok(ts)
            case Err(detail):
                return Err(_identity_error("invocation_timestamp", detail))
