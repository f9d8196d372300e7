"""
Fractional ordering.

Positions are sortable strings; a new one can always be generated
between two existing ones, so siblings never need renumbering.
"""

from kgops.ordering.position import (
    BASE_62_DIGITS,
    generate_between,
    generate_n_between,
    validate_position,
    is_valid_position,
)

__all__ = [
    "BASE_62_DIGITS",
    "generate_between",
    "generate_n_between",
    "validate_position",
    "is_valid_position",
]
