from __future__ import annotations

from pathlib import Path
from typing import List, Type, TypeVar
import logging

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from kgops.errors import RecordError

from demos.app.schemas import PersonRecord, ProjectRecord, SampleRecords, TopicRecord

RecordT = TypeVar("RecordT", bound=BaseModel)


def load_records(path: Path, model: Type[RecordT]) -> List[RecordT]:
    """
    Read a JSON list of records and validate every entry against `model`.
    """
    if not path.exists():
        raise RecordError("record file does not exist", path=str(path))

    try:
        return TypeAdapter(List[model]).validate_json(path.read_bytes())
    except PydanticValidationError as exc:
        raise RecordError(
            "record file does not match its schema",
            path=str(path),
            errors=exc.error_count(),
        ) from exc


def load_sample_records(data_dir: Path) -> SampleRecords:
    """
    Load topics.json, people.json and projects.json from `data_dir`.
    """
    logger = logging.getLogger("kgops.demo.load")

    records = SampleRecords(
        topics=load_records(data_dir / "topics.json", TopicRecord),
        people=load_records(data_dir / "people.json", PersonRecord),
        projects=load_records(data_dir / "projects.json", ProjectRecord),
    )
    logger.info(
        "loaded: %s topics, %s people, %s projects",
        len(records.topics),
        len(records.people),
        len(records.projects),
    )
    return records
