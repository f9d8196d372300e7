"""
kgops
=====

Builds, orders, persists and publishes operation batches for a
schema-less knowledge graph where types and properties are themselves
entities.

Core idea:
- Everything is an entity; schema and content are conventions over
  values and relations.

Public API:
- create_entity / create_relation / update_entity / delete_relation
- generate_between
- Batch
- GraphStore
"""

from kgops.graph.graph_builder import (
    create_entity,
    create_relation,
    update_entity,
    delete_relation,
)
from kgops.graph.graph_store import GraphStore
from kgops.ordering.position import generate_between
from kgops.batch.batch import Batch

__all__ = [
    "create_entity",
    "create_relation",
    "update_entity",
    "delete_relation",
    "generate_between",
    "Batch",
    "GraphStore",
]

__version__ = "0.1.0"
