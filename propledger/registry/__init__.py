"""propledger.registry: id allocation and sale record lifecycle."""

from propledger.registry.allocator import IdAllocator as IdAllocator
from propledger.registry.invocation import PropertyRegistry as PropertyRegistry
from propledger.registry.invocation import run_invocation as run_invocation
from propledger.registry.manager import (
    TransactionRecordManager as TransactionRecordManager,
)
from propledger.registry.records import SaleDetails as SaleDetails
from propledger.registry.records import SaleTransaction as SaleTransaction
from propledger.registry.records import decode_record as decode_record
from propledger.registry.records import encode_record as encode_record
