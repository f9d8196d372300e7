"""
Utility functions for kgops.

This module contains low-level helpers used across the system.
No domain logic should live here.
"""

from kgops.utils.ids import (
    new_id,
    derived_id,
    is_id,
    normalize_id,
    normalize_uuid_strings,
)
from kgops.utils.text import preview
from kgops.utils.serialization import to_json_safe, dumps_pretty

__all__ = [
    "new_id",
    "derived_id",
    "is_id",
    "normalize_id",
    "normalize_uuid_strings",
    "preview",
    "to_json_safe",
    "dumps_pretty",
]
