from __future__ import annotations

import itertools
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from kgops.graph.graph_schema import EntityState, Relation, Value
from kgops.graph.ops import CreateEntity, CreateRelation, DeleteRelation, Op, UpdateEntity
from kgops.registry import CoreId


class GraphStore:
    """
    In-memory graph rebuilt by replaying operations.

    Nodes are entity ids (relation ids included, so relations can be the
    source of further relations). Edges are keyed by relation id.
    """

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._relations: Dict[str, Relation] = {}
        self._sequence: Dict[str, int] = {}
        self._counter = itertools.count()
        self.metadata: Dict[str, Any] = {}

    # -------------------- Entities --------------------

    def _ensure_node(self, entity_id: str) -> Dict[str, Any]:
        if entity_id not in self._graph:
            self._graph.add_node(entity_id, values={})
        return self._graph.nodes[entity_id]

    def has_entity(self, entity_id: str) -> bool:
        return entity_id in self._graph

    def values(self, entity_id: str, property: Optional[str] = None) -> List[Value]:
        if entity_id not in self._graph:
            return []
        by_prop: Dict[str, List[Value]] = self._graph.nodes[entity_id]["values"]
        if property is not None:
            return list(by_prop.get(property, []))
        return [v for vals in by_prop.values() for v in vals]

    def get_entity(self, entity_id: str) -> EntityState:
        node = self._graph.nodes[entity_id]
        return EntityState(
            id=entity_id,
            values={k: list(v) for k, v in node["values"].items()},
            types=tuple(self.types_of(entity_id)),
        )

    def entity_ids(self) -> List[str]:
        return list(self._graph.nodes)

    def types_of(self, entity_id: str) -> List[str]:
        return [r.to_entity for r in self.relations(entity_id, CoreId.TYPES)]

    def entities_of_type(self, type_id: str) -> List[str]:
        return [r.from_entity for r in self.incoming(type_id, CoreId.TYPES)]

    # -------------------- Relations --------------------

    def add_relation(self, relation: Relation) -> None:
        if relation.id in self._relations:
            self.remove_relation(relation.id)
        self._ensure_node(relation.from_entity)
        self._ensure_node(relation.to_entity)
        self._ensure_node(relation.id)
        self._graph.add_edge(
            relation.from_entity,
            relation.to_entity,
            key=relation.id,
            data=relation,
        )
        self._relations[relation.id] = relation
        self._sequence[relation.id] = next(self._counter)

    def remove_relation(self, relation_id: str) -> None:
        relation = self._relations.pop(relation_id, None)
        if relation is None:
            return
        self._sequence.pop(relation_id, None)
        self._graph.remove_edge(relation.from_entity, relation.to_entity, key=relation_id)

    def has_relation(self, relation_id: str) -> bool:
        return relation_id in self._relations

    def get_relation(self, relation_id: str) -> Relation:
        return self._relations[relation_id]

    def _sort_key(self, relation: Relation):
        # positioned relations first, in key order, then insertion order
        return (
            relation.position is None,
            relation.position or "",
            self._sequence[relation.id],
        )

    def relations(
        self,
        from_entity: str,
        type: Optional[str] = None,
    ) -> List[Relation]:
        if from_entity not in self._graph:
            return []
        found = [
            data["data"]
            for _, _, data in self._graph.out_edges(from_entity, data=True)
            if type is None or data["data"].type == type
        ]
        return sorted(found, key=self._sort_key)

    def incoming(self, to_entity: str, type: Optional[str] = None) -> List[Relation]:
        if to_entity not in self._graph:
            return []
        found = [
            data["data"]
            for _, _, data in self._graph.in_edges(to_entity, data=True)
            if type is None or data["data"].type == type
        ]
        return sorted(found, key=lambda r: self._sequence[r.id])

    def all_relations(self) -> List[Relation]:
        return sorted(self._relations.values(), key=lambda r: self._sequence[r.id])

    # -------------------- Replay --------------------

    def apply(self, op: Op) -> None:
        if isinstance(op, CreateEntity):
            node = self._ensure_node(op.id)
            for value in op.values:
                node["values"].setdefault(value.property, []).append(value)
        elif isinstance(op, UpdateEntity):
            node = self._ensure_node(op.id)
            for prop in op.unset:
                node["values"].pop(prop, None)
            for value in op.set:
                node["values"].setdefault(value.property, []).append(value)
        elif isinstance(op, CreateRelation):
            self.add_relation(op.as_relation())
        elif isinstance(op, DeleteRelation):
            self.remove_relation(op.id)
        else:
            raise TypeError(f"unsupported operation: {op!r}")

    def apply_all(self, ops: Iterable[Op]) -> "GraphStore":
        for op in ops:
            self.apply(op)
        return self

    @classmethod
    def from_ops(cls, ops: Iterable[Op]) -> "GraphStore":
        return cls().apply_all(ops)

    # -------------------- Analytics --------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    # -------------------- Cloning --------------------

    def clone(self) -> "GraphStore":
        g = GraphStore()
        g._graph = self._graph.copy()
        for node_id in g._graph.nodes:
            values = g._graph.nodes[node_id]["values"]
            g._graph.nodes[node_id]["values"] = {k: list(v) for k, v in values.items()}
        g._relations = dict(self._relations)
        g._sequence = dict(self._sequence)
        g._counter = itertools.count(max(self._sequence.values(), default=-1) + 1)
        g.metadata = dict(self.metadata)
        return g
