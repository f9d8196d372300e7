"""
Configuration layer for kgops.

Configuration contracts for the query client, publishing, persisted
batch records and the sample data.

Configuration in kgops is:
- Explicit (passed, not global)
- Frozen once constructed
"""

from kgops.config.settings import (
    ClientConfig,
    PublishConfig,
    RecordConfig,
    DemoDataConfig,
    KgopsConfig,
)

__all__ = [
    "ClientConfig",
    "PublishConfig",
    "RecordConfig",
    "DemoDataConfig",
    "KgopsConfig",
]
