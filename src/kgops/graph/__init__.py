"""
Graph subsystem for kgops.

Defines the entity/value/relation model used for:
- building operation lists
- replaying them into an inspectable in-memory graph
- reading back schema and content conventions
"""

from kgops.graph.graph_schema import (
    ValueKind,
    Value,
    Relation,
    RelationSpec,
    EntityState,
    Point,
    Rect,
)
from kgops.graph.ops import (
    OpType,
    Op,
    CreateEntity,
    UpdateEntity,
    CreateRelation,
    DeleteRelation,
    op_from_dict,
)
from kgops.graph.graph_builder import (
    BuildResult,
    create_entity,
    create_relation,
    update_entity,
    delete_relation,
)
from kgops.graph.graph_store import GraphStore
from kgops.graph.graph_query import GraphQueryEngine, BlockRef, Backlink

__all__ = [
    "ValueKind",
    "Value",
    "Relation",
    "RelationSpec",
    "EntityState",
    "Point",
    "Rect",
    "OpType",
    "Op",
    "CreateEntity",
    "UpdateEntity",
    "CreateRelation",
    "DeleteRelation",
    "op_from_dict",
    "BuildResult",
    "create_entity",
    "create_relation",
    "update_entity",
    "delete_relation",
    "GraphStore",
    "GraphQueryEngine",
    "BlockRef",
    "Backlink",
]
