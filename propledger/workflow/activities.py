"""Activity implementations for the property registry.

Activities are thin IO wrappers. All registry logic lives in
propledger.registry; each activity only adapts its input into an identity
provider and sale details, runs one invocation, and flattens the result.

Each activity:
- Is decorated with @activity.defn
- Takes a single frozen-dataclass input
- Returns a frozen-dataclass output (with optional error field)
"""

from __future__ import annotations

from typing import final

from temporalio import activity

from propledger.core.result import Err, Ok
from propledger.infra.config import RegistryConfig
from propledger.infra.identity import StaticIdentityProvider
from propledger.infra.protocols import Ledger
from propledger.registry.invocation import PropertyRegistry
from propledger.workflow.types import (
    CreateTransactionInput,
    CreateTransactionOutput,
    DeleteTransactionOutput,
    GetTransactionOutput,
    TransactionIdInput,
    TransactionView,
)


def _identity(inp: CreateTransactionInput | TransactionIdInput) -> StaticIdentityProvider:
    return StaticIdentityProvider(caller=inp.caller_identity, submitted_at=inp.submitted_at)


@final
class RegistryActivities:
    """Registry activities bound to one ledger.

    Register the bound methods with a worker::

        acts = RegistryActivities(ledger)
        Worker(client, task_queue=..., activities=acts.all())
    """

    def __init__(self, ledger: Ledger, config: RegistryConfig | None = None) -> None:
        self._registry = PropertyRegistry(ledger, config)

    def all(self) -> list[object]:
        return [self.create_transaction, self.get_transaction, self.delete_transaction]

    # -----------------------------------------------------------------------
    # CreateTransaction
    # -----------------------------------------------------------------------

    @activity.defn(name="create_transaction")
    async def create_transaction(self, inp: CreateTransactionInput) -> CreateTransactionOutput:
        """Allocate an id and record a sale.

        Not idempotent: a retried activity creates a second record.
        Schedule with RetryPolicy(maximum_attempts=1).
        """
        activity.logger.info(
            "Creating transaction for registry entry %s", inp.registry_entry,
        )
        match self._registry.create_transaction(_identity(inp), inp.details()):
            case Err(error):
                activity.logger.warning(
                    "CreateTransaction failed (%s): %s", error.code, error.message,
                )
                return CreateTransactionOutput(error=error.describe())
            case Ok(transaction_id):
                activity.logger.info("Created transaction %d", transaction_id)
                return CreateTransactionOutput(transaction_id=transaction_id)

    # -----------------------------------------------------------------------
    # GetTransaction
    # -----------------------------------------------------------------------

    @activity.defn(name="get_transaction")
    async def get_transaction(self, inp: TransactionIdInput) -> GetTransactionOutput:
        """Read one record. Idempotent: no writes."""
        activity.logger.info("Reading transaction %d", inp.transaction_id)
        match self._registry.get_transaction(_identity(inp), inp.transaction_id):
            case Err(error):
                activity.logger.warning(
                    "GetTransaction %d failed (%s): %s",
                    inp.transaction_id, error.code, error.message,
                )
                return GetTransactionOutput(error=error.describe())
            case Ok(record):
                return GetTransactionOutput(transaction=TransactionView.from_record(record))

    # -----------------------------------------------------------------------
    # DeleteTransaction
    # -----------------------------------------------------------------------

    @activity.defn(name="delete_transaction")
    async def delete_transaction(self, inp: TransactionIdInput) -> DeleteTransactionOutput:
        """Delete one record on behalf of its creator.

        Safe to retry: a repeat after success reports NOT_FOUND.
        """
        activity.logger.info("Deleting transaction %d", inp.transaction_id)
        match self._registry.delete_transaction(_identity(inp), inp.transaction_id):
            case Err(error):
                activity.logger.warning(
                    "DeleteTransaction %d failed (%s): %s",
                    inp.transaction_id, error.code, error.message,
                )
                return DeleteTransactionOutput(error=error.describe())
            case Ok():
                activity.logger.info("Deleted transaction %d", inp.transaction_id)
                return DeleteTransactionOutput(deleted=True)
