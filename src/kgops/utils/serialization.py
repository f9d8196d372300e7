from __future__ import annotations

import base64
import json
from decimal import Decimal
from typing import Any

import numpy as np


def to_json_safe(value: Any) -> Any:
    """
    Converts nested values into something json.dumps accepts.
    """
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {k: to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json_safe(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


def dumps_pretty(value: Any) -> str:
    return json.dumps(to_json_safe(value), indent=2)
