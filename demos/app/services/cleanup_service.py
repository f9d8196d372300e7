from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from kgops.batch.cleanup import compensating_ops
from kgops.batch.record import read_record, write_record
from kgops.config.settings import RecordConfig
from kgops.graph.ops import Op
from kgops.remote.publisher import Publisher

CLEANUP_LABEL = "Demo: delete sample entities"


class CleanupService:
    """
    Reverses a previously published batch from its persisted record.
    """

    def __init__(self, record_config: RecordConfig) -> None:
        self.record_config = record_config
        self.logger = logging.getLogger("kgops.demo.cleanup")

    @property
    def publish_record_path(self) -> Path:
        return Path(self.record_config.record_dir) / self.record_config.publish_record_file

    def build(self, record_path: Optional[Path] = None) -> List[Op]:
        path = record_path or self.publish_record_path
        ops = read_record(path)
        undo = compensating_ops(ops)
        self.logger.info(
            "%s operations in record, %s compensating operations", len(ops), len(undo)
        )
        return undo

    def run(
        self,
        *,
        record_path: Optional[Path] = None,
        publisher: Optional[Publisher] = None,
    ) -> Optional[str]:
        undo = self.build(record_path)
        write_record(
            undo,
            self.record_config.record_dir,
            self.record_config.delete_record_file,
        )
        if not undo:
            self.logger.info("nothing to delete")
            return None
        if publisher is None:
            self.logger.info("dry run: compensating batch not published")
            return None
        return publisher.publish(undo, CLEANUP_LABEL)
