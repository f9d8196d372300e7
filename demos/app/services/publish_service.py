from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from kgops.batch.batch import Batch
from kgops.batch.record import write_record
from kgops.config.settings import DemoDataConfig, RecordConfig
from kgops.graph.graph_builder import create_entity
from kgops.graph.graph_schema import RelationSpec, Value, ValueKind
from kgops.ontology.conventions import (
    attach_block,
    build_type_filter,
    create_collection_block,
    create_query_block,
    create_text_block,
)
from kgops.ontology.media import MediaUploader, create_image, set_avatar
from kgops.registry import PROPERTIES, TYPES
from kgops.remote.publisher import Publisher
from kgops.utils.text import preview

from demos.app.schemas import SampleRecords


# Maps record fields to their property id and value kind.
# Adding a property only needs an entry here.
VALUE_PROPERTIES: Dict[str, Tuple[str, ValueKind]] = {
    "web_url": (PROPERTIES["web_url"], ValueKind.TEXT),
    "birth_date": (PROPERTIES["birth_date"], ValueKind.DATE),
    "date_founded": (PROPERTIES["date_founded"], ValueKind.DATE),
}

PUBLISH_LABEL = "Demo: publish sample entities"


def extract_values(record: BaseModel) -> List[Value]:
    data = record.model_dump()
    values: List[Value] = []
    for field_name, (property_id, kind) in VALUE_PROPERTIES.items():
        if data.get(field_name) is not None:
            values.append(Value.create(property_id, kind, data[field_name]))
    return values


def topic_relations(
    names: Iterable[str],
    topic_ids: Dict[str, str],
) -> Dict[str, List[RelationSpec]]:
    targets = [RelationSpec(to_entity=topic_ids[n]) for n in names if n in topic_ids]
    if not targets:
        return {}
    return {PROPERTIES["topics"]: targets}


@dataclass
class DemoBatch:
    batch: Batch
    topic_ids: Dict[str, str] = field(default_factory=dict)
    person_ids: Dict[str, str] = field(default_factory=dict)
    project_ids: Dict[str, str] = field(default_factory=dict)
    block_relation_ids: Dict[str, List[str]] = field(default_factory=dict)


class PublishService:
    """
    Turns the sample records into one batch: topics, people, projects,
    their text blocks and avatars, and the showcase data blocks.
    """

    def __init__(
        self,
        *,
        data_config: DemoDataConfig,
        space_id: Optional[str] = None,
        uploader: Optional[MediaUploader] = None,
    ) -> None:
        self.data_config = data_config
        self.space_id = space_id
        self.uploader = uploader
        self.logger = logging.getLogger("kgops.demo.publish")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, records: SampleRecords) -> DemoBatch:
        demo = DemoBatch(batch=Batch(label=PUBLISH_LABEL))

        self._add_topics(demo, records)
        self._add_people(demo, records)
        self._add_projects(demo, records)
        self._add_text_blocks(demo, records)
        self._add_avatars(demo, records)
        self._add_data_blocks(demo)

        self.logger.info("total operations generated: %s", len(demo.batch))
        for op_type, count in demo.batch.summary().items():
            self.logger.info("  %s: %s", op_type, count)
        return demo

    def persist(self, demo: DemoBatch, record_config: RecordConfig) -> Optional[Path]:
        return write_record(
            demo.batch.ops,
            record_config.record_dir,
            record_config.publish_record_file,
        )

    def publish(
        self,
        demo: DemoBatch,
        *,
        record_config: RecordConfig,
        publisher: Optional[Publisher] = None,
    ) -> Optional[str]:
        """
        Persist the batch record, then publish it when a publisher is
        available. Returns the transaction hash, or None on a dry run.
        """
        self.persist(demo, record_config)
        if publisher is None:
            self.logger.info("dry run: batch not published")
            return None
        return publisher.publish(demo.batch.ops, demo.batch.label)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _add_topics(self, demo: DemoBatch, records: SampleRecords) -> None:
        # topics have no dependencies, so they come first
        for topic in records.topics:
            topic_id = demo.batch.add(
                create_entity(
                    name=topic.name,
                    description=topic.description,
                    types=[TYPES["topic"]],
                )
            )
            demo.topic_ids[topic.name] = topic_id
            self.logger.info('created topic: "%s" -> %s', topic.name, topic_id)

    def _add_people(self, demo: DemoBatch, records: SampleRecords) -> None:
        for person in records.people:
            person_id = demo.batch.add(
                create_entity(
                    name=person.name,
                    description=person.description,
                    types=[TYPES["person"]],
                    values=extract_values(person),
                    relations=topic_relations(person.topics, demo.topic_ids),
                )
            )
            demo.person_ids[person.name] = person_id
            self.logger.info('created person: "%s" -> %s', person.name, person_id)

    def _add_projects(self, demo: DemoBatch, records: SampleRecords) -> None:
        for project in records.projects:
            project_id = demo.batch.add(
                create_entity(
                    name=project.name,
                    description=project.description,
                    types=[TYPES["project"]],
                    values=extract_values(project),
                    relations=topic_relations(project.topics, demo.topic_ids),
                )
            )
            demo.project_ids[project.name] = project_id
            self.logger.info('created project: "%s" -> %s', project.name, project_id)

    def _attach(self, demo: DemoBatch, parent_id: str, block, view=None) -> str:
        relation_id = attach_block(demo.batch, parent=parent_id, block=block, view=view)
        demo.block_relation_ids.setdefault(parent_id, []).append(relation_id)
        return relation_id

    def _add_text_blocks(self, demo: DemoBatch, records: SampleRecords) -> None:
        # one text block per line, each with its own Blocks relation
        for project in records.projects:
            if not project.blocks:
                continue
            parent_id = demo.project_ids[project.name]
            self.logger.info(
                'adding %s text blocks to "%s"', len(project.blocks), project.name
            )
            for line in project.blocks:
                block = create_text_block(line)
                self._attach(demo, parent_id, block)
                self.logger.info(
                    '  block %s  pos: %s  "%s"',
                    block.id,
                    demo.batch.last_position(parent_id),
                    preview(line),
                )

    def _add_avatars(self, demo: DemoBatch, records: SampleRecords) -> None:
        for project in records.projects:
            if not project.avatar_url:
                continue
            if self.uploader is None:
                self.logger.warning(
                    'no media uploader configured; skipping avatar for "%s"',
                    project.name,
                )
                continue
            parent_id = demo.project_ids[project.name]
            image = create_image(
                self.uploader,
                project.avatar_url,
                name=f"{project.name} Avatar",
            )
            demo.batch.extend(image.ops)
            demo.batch.add(set_avatar(entity=parent_id, image=image.id))
            self.logger.info(
                "created image entity: %s (location: %s)", image.id, image.location
            )

    def _add_data_blocks(self, demo: DemoBatch) -> None:
        showcase = self.data_config.showcase_project
        parent_id = demo.project_ids.get(showcase)
        if parent_id is None:
            self.logger.warning('showcase project "%s" not found; no data blocks', showcase)
            return

        # live query over every topic in the space, shown as a gallery
        space_ids = [self.space_id] if self.space_id else None
        query_filter = build_type_filter(TYPES["topic"], space_ids)
        query_block = create_query_block(name="Related Topics", filter=query_filter)
        self._attach(demo, parent_id, query_block, view="gallery")
        self.logger.info(
            "attached query block %s  pos: %s  filter: %s",
            query_block.id,
            demo.batch.last_position(parent_id),
            query_filter,
        )

        # hand-picked people, shown as a list
        items = []
        for name in self.data_config.key_people:
            person_id = demo.person_ids.get(name)
            if person_id is None:
                self.logger.warning('key person "%s" not found; skipped', name)
                continue
            items.append(person_id)
        if not items:
            return

        collection_block = create_collection_block(name="Key People", items=items)
        self._attach(demo, parent_id, collection_block, view="list")
        self.logger.info(
            "attached collection block %s  pos: %s  items: %s",
            collection_block.id,
            demo.batch.last_position(parent_id),
            items,
        )
