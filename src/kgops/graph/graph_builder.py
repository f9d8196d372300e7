from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Collection, Iterable, List, NamedTuple, Optional

from kgops.errors import ValidationError
from kgops.graph.graph_schema import Relation, RelationSpec, Value, ValueKind
from kgops.graph.ops import CreateEntity, CreateRelation, DeleteRelation, Op, UpdateEntity
from kgops.ordering.position import validate_position
from kgops.registry import CoreId
from kgops.utils.ids import new_id, normalize_id


class BuildResult(NamedTuple):
    """
    Id of the created entity or relation plus the operations that create it.
    """

    id: str
    ops: List[Op]


def _targets(raw: Any) -> List[RelationSpec]:
    if raw is None:
        return []
    if isinstance(raw, (str, Mapping, RelationSpec)):
        return [RelationSpec.from_input(raw)]
    if isinstance(raw, Iterable):
        return [RelationSpec.from_input(item) for item in raw]
    raise ValidationError("relation targets must be a target or a list", value=raw)


def _unique_ids(ids: Iterable[str]) -> List[str]:
    seen: dict[str, None] = {}
    for raw in ids:
        seen.setdefault(normalize_id(raw), None)
    return list(seen)


def create_relation(
    *,
    from_entity: str,
    to_entity: str,
    type: str,
    position: Optional[str] = None,
    sub_relations: Optional[Mapping[str, Any]] = None,
    id: Optional[str] = None,
) -> BuildResult:
    """
    Builds a relation and, through `sub_relations`, relations whose
    source is the new relation itself (e.g. a view on a Blocks relation).
    """
    if position is not None:
        validate_position(position)

    relation = Relation.create(
        from_entity=from_entity,
        to_entity=to_entity,
        type=type,
        position=position,
        id=id,
    )
    ops: List[Op] = [CreateRelation.from_relation(relation)]

    for sub_type, targets in (sub_relations or {}).items():
        for spec in _targets(targets):
            ops.extend(
                create_relation(
                    from_entity=relation.id,
                    to_entity=spec.to_entity,
                    type=sub_type,
                    position=spec.position,
                    sub_relations=spec.sub_relations,
                    id=spec.id,
                ).ops
            )

    return BuildResult(relation.id, ops)


def create_entity(
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    types: Iterable[str] = (),
    values: Iterable[Any] = (),
    relations: Optional[Mapping[str, Any]] = None,
    id: Optional[str] = None,
) -> BuildResult:
    """
    Builds a new entity.

    The creation op comes first, then one Types relation per type,
    then the requested relations in mapping order. Values keep their
    input order and may repeat a property.
    """
    entity_id = normalize_id(id) if id is not None else new_id()

    entity_values: List[Value] = []
    if name is not None:
        entity_values.append(Value.create(CoreId.NAME, ValueKind.TEXT, name))
    if description is not None:
        entity_values.append(
            Value.create(CoreId.DESCRIPTION, ValueKind.TEXT, description)
        )
    entity_values.extend(Value.from_input(v) for v in values)

    ops: List[Op] = [CreateEntity(id=entity_id, values=tuple(entity_values))]

    for type_id in _unique_ids(types):
        ops.extend(
            create_relation(
                from_entity=entity_id,
                to_entity=type_id,
                type=CoreId.TYPES,
            ).ops
        )

    for relation_type, targets in (relations or {}).items():
        for spec in _targets(targets):
            ops.extend(
                create_relation(
                    from_entity=entity_id,
                    to_entity=spec.to_entity,
                    type=relation_type,
                    position=spec.position,
                    sub_relations=spec.sub_relations,
                    id=spec.id,
                ).ops
            )

    return BuildResult(entity_id, ops)


def update_entity(
    *,
    id: str,
    unset: Iterable[Any] = (),
    values: Iterable[Any] = (),
    known_ids: Optional[Collection[str]] = None,
) -> List[Op]:
    """
    Builds an update that sets `values` and removes every value of the
    `unset` properties.

    When `known_ids` is given, the entity must be one of them.
    """
    entity_id = normalize_id(id)
    if known_ids is not None and entity_id not in known_ids:
        raise ValidationError("entity was not created in this batch", id=entity_id)

    props = _unique_ids(
        item.get("property") if isinstance(item, Mapping) else item for item in unset
    )
    new_values = tuple(Value.from_input(v) for v in values)
    if not props and not new_values:
        raise ValidationError("update needs values to set or properties to unset")

    return [UpdateEntity(id=entity_id, set=new_values, unset=tuple(props))]


def delete_relation(*, id: str) -> List[Op]:
    return [DeleteRelation(id=normalize_id(id))]
