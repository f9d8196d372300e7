import uuid

import pytest

from kgops.errors import ValidationError
from kgops.graph.graph_builder import (
    create_entity,
    create_relation,
    delete_relation,
    update_entity,
)
from kgops.graph.graph_schema import RelationSpec, Value, ValueKind
from kgops.graph.ops import CreateEntity, CreateRelation, DeleteRelation, UpdateEntity
from kgops.registry import PROPERTIES, TYPES, VIEWS, CoreId
from kgops.utils.ids import is_id, new_id


def test_create_entity_op_order_and_values():
    built = create_entity(
        name="Ada Lovelace",
        description="Mathematician",
        types=[TYPES["person"], TYPES["person"]],
        values=[
            Value.create(PROPERTIES["web_url"], ValueKind.TEXT, "https://a.example"),
            {"property": PROPERTIES["web_url"], "kind": "text", "value": "https://b.example"},
        ],
    )

    assert is_id(built.id)
    create, types_rel = built.ops
    assert isinstance(create, CreateEntity)
    assert create.id == built.id

    assert [v.property for v in create.values] == [
        CoreId.NAME.value,
        CoreId.DESCRIPTION.value,
        PROPERTIES["web_url"],
        PROPERTIES["web_url"],
    ]
    assert [v.value for v in create.values][2:] == [
        "https://a.example",
        "https://b.example",
    ]

    # duplicate types collapse into one membership
    assert isinstance(types_rel, CreateRelation)
    assert types_rel.relation_type == CoreId.TYPES.value
    assert types_rel.from_entity == built.id
    assert types_rel.to_entity == TYPES["person"]


def test_create_entity_without_name_or_description():
    built = create_entity(types=[TYPES["topic"]])
    create = built.ops[0]
    assert create.values == ()
    assert len(built.ops) == 2


def test_relations_follow_the_mapping_order():
    a, b, c = new_id(), new_id(), new_id()
    built = create_entity(
        name="Project",
        relations={
            PROPERTIES["topics"]: [a, {"to_entity": b}],
            PROPERTIES["blocks"]: RelationSpec(to_entity=c, position="a0"),
        },
    )

    rels = [op for op in built.ops if isinstance(op, CreateRelation)]
    assert [r.to_entity for r in rels] == [a, b, c]
    assert [r.relation_type for r in rels] == [
        PROPERTIES["topics"],
        PROPERTIES["topics"],
        PROPERTIES["blocks"],
    ]
    assert rels[2].position == "a0"


def test_sub_relation_source_is_the_relation_id():
    parent, block = new_id(), new_id()
    built = create_relation(
        from_entity=parent,
        to_entity=block,
        type=CoreId.BLOCKS,
        position="a0",
        sub_relations={CoreId.VIEW.value: VIEWS["table"]},
    )

    outer, view = built.ops
    assert outer.id == built.id
    assert outer.from_entity == parent
    assert view.from_entity == built.id
    assert view.relation_type == CoreId.VIEW.value
    assert view.to_entity == VIEWS["table"]


def test_dashed_and_uppercase_ids_are_normalized():
    target = uuid.uuid4()
    built = create_relation(
        from_entity=str(target).upper(),
        to_entity=str(target),
        type=CoreId.TYPES,
    )
    op = built.ops[0]
    assert op.from_entity == target.hex
    assert op.to_entity == target.hex


def test_explicit_id_is_kept():
    entity_id = new_id()
    built = create_entity(name="Fixed", id=entity_id)
    assert built.id == entity_id


@pytest.mark.parametrize("bad", ["not-an-id", "abc", 42, None])
def test_invalid_ids_are_rejected(bad):
    with pytest.raises(ValidationError):
        create_relation(from_entity=bad, to_entity=new_id(), type=CoreId.TYPES)


def test_invalid_position_is_rejected():
    with pytest.raises(ValidationError):
        create_relation(
            from_entity=new_id(),
            to_entity=new_id(),
            type=CoreId.BLOCKS,
            position="a00",
        )


def test_update_entity_set_and_unset():
    entity_id = new_id()
    ops = update_entity(
        id=entity_id,
        unset=[CoreId.NAME, {"property": CoreId.DESCRIPTION.value}, CoreId.NAME],
        values=[Value.create(CoreId.NAME, ValueKind.TEXT, "Renamed")],
    )

    assert len(ops) == 1
    update = ops[0]
    assert isinstance(update, UpdateEntity)
    assert update.unset == (CoreId.NAME.value, CoreId.DESCRIPTION.value)
    assert update.set[0].value == "Renamed"


def test_update_entity_needs_something_to_do():
    with pytest.raises(ValidationError):
        update_entity(id=new_id())


def test_update_entity_checks_known_ids():
    known = {new_id()}
    with pytest.raises(ValidationError) as excinfo:
        update_entity(id=new_id(), unset=[CoreId.NAME], known_ids=known)
    assert excinfo.value.get("id") is not None


def test_delete_relation():
    relation_id = uuid.uuid4()
    ops = delete_relation(id=str(relation_id))
    assert ops == [DeleteRelation(id=relation_id.hex)]
