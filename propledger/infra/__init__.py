"""propledger.infra: Ledger/identity protocols, adapters, and configuration."""

from propledger.infra.config import PropledgerConfig as PropledgerConfig
from propledger.infra.config import RegistryConfig as RegistryConfig
from propledger.infra.config import TemporalWorkerConfig as TemporalWorkerConfig
from propledger.infra.config import load_config as load_config
from propledger.infra.identity import StaticIdentityProvider as StaticIdentityProvider
from propledger.infra.memory_adapter import InMemoryInvocation as InMemoryInvocation
from propledger.infra.memory_adapter import InMemoryLedger as InMemoryLedger
from propledger.infra.protocols import IdentityProvider as IdentityProvider
from propledger.infra.protocols import Ledger as Ledger
from propledger.infra.protocols import LedgerInvocation as LedgerInvocation
from propledger.infra.protocols import StateStore as StateStore
