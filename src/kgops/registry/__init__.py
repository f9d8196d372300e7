"""
Identifier registry.

Fixed ids of the well-known types, properties, views and data-source
markers of the knowledge graph ontology.
"""

from kgops.registry.known_ids import (
    ROOT_SPACE_ID,
    TYPES,
    PROPERTIES,
    VIEWS,
    QUERY_DATA_SOURCE,
    COLLECTION_DATA_SOURCE,
    LOCAL_TYPES,
    LOCAL_PROPERTIES,
    RENDERABLE_TYPES,
    CoreId,
    lookup,
    known_names,
)

__all__ = [
    "ROOT_SPACE_ID",
    "TYPES",
    "PROPERTIES",
    "VIEWS",
    "QUERY_DATA_SOURCE",
    "COLLECTION_DATA_SOURCE",
    "LOCAL_TYPES",
    "LOCAL_PROPERTIES",
    "RENDERABLE_TYPES",
    "CoreId",
    "lookup",
    "known_names",
]
