from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from kgops.graph.graph_store import GraphStore
from kgops.registry import CoreId

_BLOCK_KINDS = {
    CoreId.TEXT_BLOCK.value: "text",
    CoreId.DATA_BLOCK.value: "data",
    CoreId.IMAGE.value: "image",
    CoreId.VIDEO.value: "video",
    CoreId.PDF.value: "pdf",
}


@dataclass(frozen=True)
class BlockRef:
    """
    One content block as seen from its parent.
    """

    relation_id: str
    block_id: str
    position: Optional[str]
    kind: str
    view: Optional[str] = None


@dataclass(frozen=True)
class Backlink:
    from_entity: str
    relation_type: str
    relation_id: str


class GraphQueryEngine:
    """
    Read-side helpers over a replayed GraphStore that follow the
    ontology conventions (Types, Properties, Blocks, data sources).
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def name_of(self, entity_id: str) -> Optional[str]:
        vals = self.store.values(entity_id, CoreId.NAME)
        return vals[0].value if vals else None

    def describe(self, entity_id: str) -> Dict[str, Any]:
        descs = self.store.values(entity_id, CoreId.DESCRIPTION)
        return {
            "id": entity_id,
            "name": self.name_of(entity_id),
            "description": descs[0].value if descs else None,
            "types": self.store.types_of(entity_id),
        }

    def has_type(self, entity_id: str, type_id: str) -> bool:
        return type_id in self.store.types_of(entity_id)

    def schema_of(self, type_id: str) -> List[str]:
        """
        Property ids attached to a type through the Properties relation.
        """
        return [r.to_entity for r in self.store.relations(type_id, CoreId.PROPERTIES)]

    def block_kind(self, block_id: str) -> str:
        for type_id in self.store.types_of(block_id):
            kind = _BLOCK_KINDS.get(type_id)
            if kind is not None:
                return kind
        return "unknown"

    def blocks(self, parent_id: str) -> List[BlockRef]:
        refs: List[BlockRef] = []
        for rel in self.store.relations(parent_id, CoreId.BLOCKS):
            views = self.store.relations(rel.id, CoreId.VIEW)
            refs.append(
                BlockRef(
                    relation_id=rel.id,
                    block_id=rel.to_entity,
                    position=rel.position,
                    kind=self.block_kind(rel.to_entity),
                    view=views[0].to_entity if views else None,
                )
            )
        return refs

    def data_source(self, block_id: str) -> Optional[str]:
        """
        "query" or "collection" for data blocks, None when unmarked.
        """
        for rel in self.store.relations(block_id, CoreId.DATA_SOURCE_TYPE):
            if rel.to_entity == CoreId.QUERY_DATA_SOURCE:
                return "query"
            if rel.to_entity == CoreId.COLLECTION_DATA_SOURCE:
                return "collection"
        return None

    def collection_items(self, block_id: str) -> List[str]:
        return [
            r.to_entity
            for r in self.store.relations(block_id, CoreId.COLLECTION_ITEM)
        ]

    def backlinks(self, entity_id: str) -> List[Backlink]:
        return [
            Backlink(
                from_entity=r.from_entity,
                relation_type=r.type,
                relation_id=r.id,
            )
            for r in self.store.incoming(entity_id)
        ]
