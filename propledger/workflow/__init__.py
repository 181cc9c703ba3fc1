"""propledger.workflow -- Temporal.io activity surface for the property registry."""

from propledger.workflow.activities import (
    RegistryActivities as RegistryActivities,
)
from propledger.workflow.types import (
    CreateTransactionInput as CreateTransactionInput,
)
from propledger.workflow.types import (
    CreateTransactionOutput as CreateTransactionOutput,
)
from propledger.workflow.types import (
    DeleteTransactionOutput as DeleteTransactionOutput,
)
from propledger.workflow.types import (
    GetTransactionOutput as GetTransactionOutput,
)
from propledger.workflow.types import (
    TransactionIdInput as TransactionIdInput,
)
from propledger.workflow.types import (
    TransactionView as TransactionView,
)
