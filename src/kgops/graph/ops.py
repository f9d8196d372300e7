from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union

from kgops.errors import ValidationError
from kgops.graph.graph_schema import Relation, Value
from kgops.ordering.position import validate_position
from kgops.utils.ids import normalize_id


class OpType(str, Enum):
    CREATE_ENTITY = "createEntity"
    UPDATE_ENTITY = "updateEntity"
    CREATE_RELATION = "createRelation"
    DELETE_RELATION = "deleteRelation"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CreateEntity:
    """
    Creates an entity with its initial values, in input order.
    """

    op_type: ClassVar[OpType] = OpType.CREATE_ENTITY

    id: str
    values: Tuple[Value, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.op_type.value,
            "id": self.id,
            "values": [v.to_dict() for v in self.values],
        }


@dataclass(frozen=True)
class UpdateEntity:
    """
    Sets additional values and unsets every value of the listed properties.
    """

    op_type: ClassVar[OpType] = OpType.UPDATE_ENTITY

    id: str
    set: Tuple[Value, ...] = ()
    unset: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.op_type.value,
            "id": self.id,
            "set": [v.to_dict() for v in self.set],
            "unset": [{"property": p} for p in self.unset],
        }


@dataclass(frozen=True)
class CreateRelation:
    op_type: ClassVar[OpType] = OpType.CREATE_RELATION

    id: str
    from_entity: str
    relation_type: str
    to_entity: str
    position: Optional[str] = None

    @staticmethod
    def from_relation(relation: Relation) -> "CreateRelation":
        return CreateRelation(
            id=relation.id,
            from_entity=relation.from_entity,
            relation_type=relation.type,
            to_entity=relation.to_entity,
            position=relation.position,
        )

    def as_relation(self) -> Relation:
        return Relation(
            id=self.id,
            from_entity=self.from_entity,
            type=self.relation_type,
            to_entity=self.to_entity,
            position=self.position,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.op_type.value,
            "id": self.id,
            "from": self.from_entity,
            "relationType": self.relation_type,
            "to": self.to_entity,
        }
        if self.position is not None:
            data["position"] = self.position
        return data


@dataclass(frozen=True)
class DeleteRelation:
    op_type: ClassVar[OpType] = OpType.DELETE_RELATION

    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.op_type.value, "id": self.id}


Op = Union[CreateEntity, UpdateEntity, CreateRelation, DeleteRelation]


def _values_from(raw: Any) -> Tuple[Value, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValidationError("values must be a list", value=raw)
    return tuple(Value.from_dict(v) for v in raw)


def _unset_from(raw: Any) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValidationError("unset must be a list", value=raw)
    props = []
    for item in raw:
        prop = item.get("property") if isinstance(item, Mapping) else item
        props.append(normalize_id(prop))
    return tuple(props)


def op_from_dict(data: Mapping[str, Any]) -> Op:
    """
    Parses one operation record as written by `to_dict`.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("operation record must be an object", value=data)

    try:
        op_type = OpType(data.get("type"))
    except ValueError:
        raise ValidationError("unknown operation type", type=data.get("type")) from None

    op_id = normalize_id(data.get("id"))

    if op_type is OpType.CREATE_ENTITY:
        return CreateEntity(id=op_id, values=_values_from(data.get("values")))

    if op_type is OpType.UPDATE_ENTITY:
        return UpdateEntity(
            id=op_id,
            set=_values_from(data.get("set")),
            unset=_unset_from(data.get("unset")),
        )

    if op_type is OpType.CREATE_RELATION:
        position = data.get("position")
        if position is not None:
            validate_position(position)
        return CreateRelation(
            id=op_id,
            from_entity=normalize_id(data.get("from")),
            relation_type=normalize_id(data.get("relationType")),
            to_entity=normalize_id(data.get("to")),
            position=position,
        )

    return DeleteRelation(id=op_id)
