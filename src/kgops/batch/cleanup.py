from __future__ import annotations

from typing import Dict, Iterable, List

from kgops.graph.graph_builder import delete_relation, update_entity
from kgops.graph.ops import CreateEntity, CreateRelation, Op, UpdateEntity


def compensating_ops(ops: Iterable[Op]) -> List[Op]:
    """
    Operations that undo a published batch.

    Every created entity gets one update unsetting the properties set on
    it within the batch, by its creation or by later updates; every
    created relation gets a delete. Entities created without values need
    no update. Updates to entities the batch did not create are left alone.
    """
    ops = list(ops)

    created: Dict[str, Dict[str, None]] = {}
    relation_ids: Dict[str, None] = {}
    for op in ops:
        if isinstance(op, CreateEntity):
            properties = created.setdefault(op.id, {})
            for value in op.values:
                properties.setdefault(value.property, None)
        elif isinstance(op, UpdateEntity) and op.id in created:
            for value in op.set:
                created[op.id].setdefault(value.property, None)
        elif isinstance(op, CreateRelation):
            relation_ids.setdefault(op.id, None)

    undo: List[Op] = []
    for entity_id, properties in created.items():
        if properties:
            undo.extend(
                update_entity(
                    id=entity_id,
                    unset=list(properties),
                    known_ids=created,
                )
            )

    for relation_id in relation_ids:
        undo.extend(delete_relation(id=relation_id))

    return undo
