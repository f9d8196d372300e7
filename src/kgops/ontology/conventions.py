from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from kgops.batch.batch import Batch
from kgops.errors import ValidationError
from kgops.graph.graph_builder import BuildResult, create_entity, create_relation
from kgops.graph.graph_schema import RelationSpec, Value, ValueKind
from kgops.ordering.position import generate_n_between
from kgops.registry import VIEWS, CoreId
from kgops.utils.ids import normalize_id

# ---------------------------------------------------------------------
# Schema: types and properties are entities
# ---------------------------------------------------------------------


def create_property(
    *,
    name: str,
    data_type: ValueKind | str | None = None,
    renderable_type: Optional[str] = None,
    description: Optional[str] = None,
    id: Optional[str] = None,
) -> BuildResult:
    """
    Builds a Property entity.

    The data type is stored as the kind name; the renderable type is a
    relation to a presentation-hint entity and is not checked against
    the data type.
    """
    values = []
    if data_type is not None:
        values.append(
            Value.create(CoreId.DATA_TYPE, ValueKind.TEXT, ValueKind.parse(data_type).value)
        )

    relations = {}
    if renderable_type is not None:
        relations[CoreId.RENDERABLE_TYPE.value] = normalize_id(renderable_type)

    return create_entity(
        name=name,
        description=description,
        types=[CoreId.PROPERTY],
        values=values,
        relations=relations,
        id=id,
    )


def create_type(
    *,
    name: str,
    properties: Iterable[str] = (),
    description: Optional[str] = None,
    id: Optional[str] = None,
) -> BuildResult:
    """
    Builds a Type entity whose schema lists `properties` in order.
    """
    prop_ids = [normalize_id(p) for p in properties]
    positions = generate_n_between(None, None, len(prop_ids))
    return create_entity(
        name=name,
        description=description,
        types=[CoreId.TYPE],
        relations={
            CoreId.PROPERTIES.value: [
                RelationSpec(to_entity=p, position=pos)
                for p, pos in zip(prop_ids, positions)
            ]
        },
        id=id,
    )


# ---------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------


def create_text_block(markdown: str, *, id: Optional[str] = None) -> BuildResult:
    return create_entity(
        types=[CoreId.TEXT_BLOCK],
        values=[Value.create(CoreId.MARKDOWN_CONTENT, ValueKind.TEXT, markdown)],
        id=id,
    )


def build_type_filter(type_id: str, space_ids: Optional[Sequence[str]] = None) -> str:
    """
    JSON filter selecting entities of one type, optionally limited to spaces.
    """
    query: dict[str, Any] = {}
    if space_ids:
        query["spaceId"] = {"in": [normalize_id(s) for s in space_ids]}
    query["filter"] = {CoreId.TYPES.value: {"is": normalize_id(type_id)}}
    return json.dumps(query)


def create_query_block(
    *,
    name: str,
    filter: Union[str, Mapping[str, Any]],
    id: Optional[str] = None,
) -> BuildResult:
    """
    Data block evaluated as a live query at render time.
    """
    if isinstance(filter, Mapping):
        filter = json.dumps(filter)
    if not isinstance(filter, str):
        raise ValidationError("query filter must be JSON text or a mapping")
    try:
        json.loads(filter)
    except json.JSONDecodeError:
        raise ValidationError("query filter is not valid JSON", filter=filter) from None

    return create_entity(
        name=name,
        types=[CoreId.DATA_BLOCK],
        values=[Value.create(CoreId.FILTER, ValueKind.TEXT, filter)],
        relations={CoreId.DATA_SOURCE_TYPE.value: CoreId.QUERY_DATA_SOURCE.value},
        id=id,
    )


def create_collection_block(
    *,
    name: str,
    items: Iterable[str],
    id: Optional[str] = None,
) -> BuildResult:
    """
    Data block listing a fixed set of entities, in the given order.
    """
    item_ids = [normalize_id(i) for i in items]
    positions = generate_n_between(None, None, len(item_ids))
    return create_entity(
        name=name,
        types=[CoreId.DATA_BLOCK],
        relations={
            CoreId.DATA_SOURCE_TYPE.value: CoreId.COLLECTION_DATA_SOURCE.value,
            CoreId.COLLECTION_ITEM.value: [
                RelationSpec(to_entity=i, position=pos)
                for i, pos in zip(item_ids, positions)
            ],
        },
        id=id,
    )


def resolve_view(view: str) -> str:
    """
    Accepts a view name from the registry ("gallery") or a view id.
    """
    return VIEWS.get(view.lower(), None) or normalize_id(view)


def attach_block(
    batch: Batch,
    *,
    parent: str,
    block: Union[BuildResult, str],
    view: Optional[str] = None,
) -> str:
    """
    Attaches a block to `parent` after the blocks already attached in
    this batch. A builder result is added to the batch first.

    Returns the id of the Blocks relation.
    """
    parent = normalize_id(parent)
    sub_relations = None
    if view is not None:
        sub_relations = {CoreId.VIEW.value: resolve_view(view)}

    # the batch is untouched until every input has been checked
    if isinstance(block, BuildResult):
        block_id = batch.add(block)
    else:
        block_id = normalize_id(block)

    return batch.add(
        create_relation(
            from_entity=parent,
            to_entity=block_id,
            type=CoreId.BLOCKS,
            position=batch.next_position(parent),
            sub_relations=sub_relations,
        )
    )
