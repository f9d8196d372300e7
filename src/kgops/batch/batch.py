from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

from kgops.graph.graph_builder import BuildResult
from kgops.graph.ops import CreateEntity, CreateRelation, Op
from kgops.ordering.position import generate_between


class Batch:
    """
    Ordered list of operations committed as one unit.

    Also carries the per-parent last position used to order attached
    blocks, so each batch has its own ordering context. Not safe to
    share between threads.
    """

    def __init__(self, label: str = "") -> None:
        self.label = label
        self._ops: List[Op] = []
        self._entity_ids: Dict[str, None] = {}
        self._relation_ids: Dict[str, None] = {}
        self._last_position: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def extend(self, ops: Iterable[Op]) -> None:
        for op in ops:
            if isinstance(op, CreateEntity):
                self._entity_ids.setdefault(op.id, None)
            elif isinstance(op, CreateRelation):
                self._relation_ids.setdefault(op.id, None)
            self._ops.append(op)

    def add(self, built: Union[BuildResult, Iterable[Op]]) -> Optional[str]:
        """
        Appends a builder result (returning its id) or a plain op list.
        """
        if isinstance(built, BuildResult):
            self.extend(built.ops)
            return built.id
        self.extend(built)
        return None

    @property
    def ops(self) -> List[Op]:
        return list(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[Op]:
        return iter(list(self._ops))

    # ------------------------------------------------------------------
    # Created ids
    # ------------------------------------------------------------------

    @property
    def entity_ids(self) -> List[str]:
        return list(self._entity_ids)

    @property
    def relation_ids(self) -> List[str]:
        return list(self._relation_ids)

    def known_ids(self) -> FrozenSet[str]:
        return frozenset(self._entity_ids) | frozenset(self._relation_ids)

    # ------------------------------------------------------------------
    # Ordering context
    # ------------------------------------------------------------------

    def last_position(self, parent_id: str) -> Optional[str]:
        return self._last_position.get(parent_id)

    def next_position(self, parent_id: str) -> str:
        """
        Position after the last one handed out for `parent_id`.
        """
        position = generate_between(self._last_position.get(parent_id), None)
        self._last_position[parent_id] = position
        return position

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for op in self._ops:
            key = op.op_type.value
            counts[key] = counts.get(key, 0) + 1
        return counts
