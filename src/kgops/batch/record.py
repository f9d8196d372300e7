from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from kgops.errors import RecordError, ValidationError
from kgops.graph.ops import Op, op_from_dict
from kgops.utils.ids import normalize_uuid_strings


def ops_to_records(ops: Iterable[Op]) -> List[Dict[str, Any]]:
    return [op.to_dict() for op in ops]


def ops_from_records(records: Any) -> List[Op]:
    if not isinstance(records, list):
        raise RecordError("batch record must be a JSON list")
    ops: List[Op] = []
    for index, record in enumerate(normalize_uuid_strings(records)):
        try:
            ops.append(op_from_dict(record))
        except ValidationError as exc:
            raise RecordError(
                "invalid operation record", index=index, reason=exc.mesg
            ) from exc
    return ops


def write_record(
    ops: Iterable[Op],
    directory: str | Path,
    filename: str,
) -> Optional[Path]:
    """
    Writes the ops as a pretty-printed JSON list.

    Nothing is written for an empty batch; returns the path otherwise.
    """
    logger = logging.getLogger("kgops.record")
    records = ops_to_records(ops)
    logger.info("number of operations: %s", len(records))

    if not records:
        logger.info("no operations to write")
        return None

    path = Path(directory) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    logger.info("operations written to %s", path)
    return path


def read_record(path: str | Path) -> List[Op]:
    logger = logging.getLogger("kgops.record")
    path = Path(path)

    if not path.exists():
        raise RecordError("batch record does not exist", path=str(path))

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RecordError(
            "batch record is not valid JSON", path=str(path), reason=str(exc)
        ) from exc

    ops = ops_from_records(records)
    logger.info("read %s operations from %s", len(ops), path)
    return ops
