from __future__ import annotations

import re
import uuid

from kgops.errors import ValidationError

_HEX_ID = re.compile(r"^[0-9a-f]{32}$")
_DASHED_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Fixed namespace for ids derived from names (see kgops.registry).
DERIVED_NAMESPACE = uuid.UUID("5b1e0a52-3c1f-4f2a-9d7e-6a0c2b8e4f10")


def new_id() -> str:
    """
    Returns a fresh random entity id (32 lowercase hex characters).
    """
    return uuid.uuid4().hex


def derived_id(name: str) -> str:
    """
    Stable id for a symbolic name, identical across processes.
    """
    return uuid.uuid5(DERIVED_NAMESPACE, name).hex


def is_id(value: object) -> bool:
    return isinstance(value, str) and bool(_HEX_ID.match(value))


def normalize_id(value: object) -> str:
    """
    Canonicalizes an id to 32 lowercase hex characters.

    Accepts the canonical form, upper case hex, hyphenated UUID strings
    and uuid.UUID instances.
    """
    if isinstance(value, uuid.UUID):
        return value.hex
    if isinstance(value, str):
        if _DASHED_UUID.match(value):
            return value.replace("-", "").lower()
        lowered = value.lower()
        if _HEX_ID.match(lowered):
            return lowered
    raise ValidationError("invalid entity id", value=value)


def normalize_uuid_strings(value):
    """
    Recursively rewrites hyphenated UUID strings to the 32-hex form.
    """
    if isinstance(value, str):
        if _DASHED_UUID.match(value):
            return value.replace("-", "").lower()
        return value
    if isinstance(value, list):
        return [normalize_uuid_strings(v) for v in value]
    if isinstance(value, dict):
        return {k: normalize_uuid_strings(v) for k, v in value.items()}
    return value
