"""propledger.core: result type, error values, and core value types."""

from propledger.core.errors import (
    AuthorizationError as AuthorizationError,
)
from propledger.core.errors import (
    FormatError as FormatError,
)
from propledger.core.errors import (
    IdentityError as IdentityError,
)
from propledger.core.errors import (
    NotFoundError as NotFoundError,
)
from propledger.core.errors import (
    RegistryError as RegistryError,
)
from propledger.core.errors import (
    StoreError as StoreError,
)
from propledger.core.result import (
    Err as Err,
)
from propledger.core.result import (
    Ok as Ok,
)
from propledger.core.result import (
    Result as Result,
)
from propledger.core.result import (
    unwrap as unwrap,
)
from propledger.core.serialization import (
    canonical_bytes as canonical_bytes,
)
from propledger.core.types import (
    CallerIdentity as CallerIdentity,
)
from propledger.core.types import (
    UtcDatetime as UtcDatetime,
)
