"""
Batches of operations: accumulation with per-parent ordering,
the persisted JSON record, and the compensating cleanup pass.
"""

from kgops.batch.batch import Batch
from kgops.batch.record import (
    ops_to_records,
    ops_from_records,
    write_record,
    read_record,
)
from kgops.batch.cleanup import compensating_ops

__all__ = [
    "Batch",
    "ops_to_records",
    "ops_from_records",
    "write_record",
    "read_record",
    "compensating_ops",
]
