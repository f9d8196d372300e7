from pathlib import Path

from kgops.batch.record import read_record
from kgops.graph.graph_query import GraphQueryEngine
from kgops.graph.graph_store import GraphStore
from kgops.graph.ops import CreateEntity, CreateRelation
from kgops.registry import PROPERTIES, TYPES, VIEWS, CoreId
from kgops.remote.publisher import Publisher

from demos.app.services.cleanup_service import CleanupService
from demos.app.services.publish_service import PublishService, extract_values

SPACE_ID = "d" * 32


def _build(sample_records, data_config, uploader=None):
    service = PublishService(
        data_config=data_config,
        space_id=SPACE_ID,
        uploader=uploader,
    )
    return service, service.build(sample_records)


def test_topics_come_first_and_carry_only_memberships(sample_records, data_config):
    _, demo = _build(sample_records, data_config)
    ops = demo.batch.ops

    creates = [op for op in ops[:6] if isinstance(op, CreateEntity)]
    assert [c.id for c in creates] == list(demo.topic_ids.values())
    assert len(creates) == 3

    store = GraphStore.from_ops(ops)
    for topic_id in demo.topic_ids.values():
        rels = store.relations(topic_id)
        assert [r.type for r in rels] == [CoreId.TYPES.value]
        assert store.types_of(topic_id) == [TYPES["topic"]]


def test_person_topic_relations_keep_order(sample_records, data_config):
    _, demo = _build(sample_records, data_config)
    store = GraphStore.from_ops(demo.batch.ops)

    vitalik = demo.person_ids["Vitalik Buterin"]
    topics = [r.to_entity for r in store.relations(vitalik, PROPERTIES["topics"])]
    assert topics == [
        demo.topic_ids["Blockchain"],
        demo.topic_ids["Decentralized Finance"],
    ]

    # unknown topic names are skipped
    satoshi = demo.person_ids["Satoshi Nakamoto"]
    assert [r.to_entity for r in store.relations(satoshi, PROPERTIES["topics"])] == [
        demo.topic_ids["Blockchain"]
    ]

    state = store.get_entity(vitalik)
    assert str(state.first(PROPERTIES["birth_date"])) == "1994-01-31"
    assert state.first(PROPERTIES["web_url"]) == "https://vitalik.eth.limo"


def test_showcase_blocks(sample_records, data_config):
    _, demo = _build(sample_records, data_config)
    engine = GraphQueryEngine(GraphStore.from_ops(demo.batch.ops))

    ethereum = demo.project_ids["Ethereum"]
    blocks = engine.blocks(ethereum)
    assert [b.kind for b in blocks] == ["text", "text", "text", "data", "data"]
    positions = [b.position for b in blocks]
    assert positions == sorted(positions)
    assert [b.relation_id for b in blocks] == demo.block_relation_ids[ethereum]

    query, collection = blocks[3], blocks[4]
    assert engine.data_source(query.block_id) == "query"
    assert query.view == VIEWS["gallery"]
    assert engine.data_source(collection.block_id) == "collection"
    assert collection.view == VIEWS["list"]
    assert engine.collection_items(collection.block_id) == [
        demo.person_ids["Vitalik Buterin"],
        demo.person_ids["Satoshi Nakamoto"],
    ]

    # projects without text blocks get no block relations
    assert engine.blocks(demo.project_ids["Bitcoin"]) == []


def test_avatar_only_with_uploader(sample_records, data_config, uploader):
    _, without = _build(sample_records, data_config)
    store = GraphStore.from_ops(without.batch.ops)
    assert store.relations(without.project_ids["Ethereum"], CoreId.AVATAR) == []

    _, demo = _build(sample_records, data_config, uploader=uploader)
    store = GraphStore.from_ops(demo.batch.ops)
    avatars = store.relations(demo.project_ids["Ethereum"], CoreId.AVATAR)
    assert len(avatars) == 1
    assert uploader.urls == ["https://ethereum.org/logo.png"]
    image = store.get_entity(avatars[0].to_entity)
    assert image.first(CoreId.MEDIA_URL) == "ipfs://bafy1"
    assert image.first(CoreId.NAME) == "Ethereum Avatar"


def test_missing_showcase_project_skips_data_blocks(sample_records, data_config):
    from dataclasses import replace

    _, demo = _build(
        sample_records, replace(data_config, showcase_project="Solana")
    )
    engine = GraphQueryEngine(GraphStore.from_ops(demo.batch.ops))
    kinds = [b.kind for b in engine.blocks(demo.project_ids["Ethereum"])]
    assert kinds == ["text", "text", "text"]


def test_extract_values_skips_missing_fields(sample_records):
    values = extract_values(sample_records.projects[1])
    assert values == []
    values = extract_values(sample_records.projects[0])
    assert [v.property for v in values] == [
        PROPERTIES["web_url"],
        PROPERTIES["date_founded"],
    ]


def test_dry_run_persists_record(sample_records, data_config, record_config):
    service, demo = _build(sample_records, data_config)
    assert service.publish(demo, record_config=record_config) is None

    path = Path(record_config.record_dir) / record_config.publish_record_file
    assert read_record(path) == demo.batch.ops


def test_publish_then_cleanup(
    sample_records, data_config, record_config, make_client, submitter, sender
):
    publisher = Publisher(
        client=make_client(lambda q: {"space": {"type": "PERSONAL"}}),
        submitter=submitter,
        sender=sender,
        space_id=SPACE_ID,
    )
    service, demo = _build(sample_records, data_config)
    tx_hash = service.publish(demo, record_config=record_config, publisher=publisher)

    assert tx_hash
    assert submitter.personal[0]["name"] == demo.batch.label
    assert len(submitter.personal[0]["ops"]) == len(demo.batch)

    cleanup = CleanupService(record_config)
    assert cleanup.run(publisher=publisher)
    undo = read_record(Path(record_config.record_dir) / record_config.delete_record_file)

    deleted = {op.id for op in undo if not isinstance(op, CreateEntity)}
    created_relations = {op.id for op in demo.batch if isinstance(op, CreateRelation)}
    assert created_relations <= deleted

    store = GraphStore.from_ops(demo.batch.ops + undo)
    assert store.all_relations() == []
    assert len(submitter.personal) == 2


def test_cleanup_dry_run(sample_records, data_config, record_config):
    service, demo = _build(sample_records, data_config)
    service.persist(demo, record_config)

    cleanup = CleanupService(record_config)
    assert cleanup.run() is None
    delete_path = Path(record_config.record_dir) / record_config.delete_record_file
    assert delete_path.exists()
