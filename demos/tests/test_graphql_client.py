import uuid

import pytest

from kgops.config.settings import ClientConfig
from kgops.errors import GraphQLError, NetworkError, ValidationError
from kgops.registry import ROOT_SPACE_ID, TYPES
from kgops.remote import queries
from kgops.remote.graphql_client import GraphQLClient


def test_execute_returns_data(make_client):
    client = make_client(lambda q: {"space": {"id": ROOT_SPACE_ID, "type": "DAO"}})
    assert client.execute("{ space { id } }") == {
        "space": {"id": ROOT_SPACE_ID, "type": "DAO"}
    }

    call = client.session.calls[0]
    assert call["url"] == "https://api.example.test/graphql"
    assert call["timeout"] == 5.0
    assert "variables" not in call["json"]


def test_execute_passes_variables(make_client):
    client = make_client(lambda q: {})
    assert client.execute("query($id: UUID!) { x }", {"id": "1"}) == {}
    assert client.session.calls[0]["json"]["variables"] == {"id": "1"}


def test_graphql_errors_raise(make_client, http_response):
    errors = [{"message": "Cannot query field"}]
    client = make_client(lambda q: http_response({"errors": errors}))

    with pytest.raises(GraphQLError) as excinfo:
        client.execute("{ nope }")
    assert "Cannot query field" in str(excinfo.value)
    assert excinfo.value.get("errors") == errors
    assert isinstance(excinfo.value, NetworkError)


def test_http_error_raises(make_client, http_response):
    client = make_client(
        lambda q: http_response(None, status_code=502, reason="Bad Gateway")
    )
    with pytest.raises(NetworkError) as excinfo:
        client.execute("{ space { id } }")
    assert excinfo.value.get("status") == 502


def test_transport_error_raises(make_client, connection_error):
    client = make_client(lambda q: connection_error)
    with pytest.raises(NetworkError):
        client.execute("{ space { id } }")


def test_invalid_json_raises(make_client, invalid_json_response):
    client = make_client(lambda q: invalid_json_response)
    with pytest.raises(NetworkError):
        client.execute("{ space { id } }")


@pytest.mark.parametrize("payload", [None, [], ["data"], "ok"])
def test_non_object_json_raises(make_client, http_response, payload):
    client = make_client(lambda q: http_response(payload))
    with pytest.raises(NetworkError):
        client.execute("{ space { id } }")


def test_from_config_and_close(make_client):
    client = GraphQLClient.from_config(
        ClientConfig(api_url="https://api.example.test/graphql", timeout_s=3.0),
        session=make_client(lambda q: {}).session,
    )
    assert client.timeout_s == 3.0
    client.close()
    assert client.session.closed


def test_queries_use_canonical_ids(make_client):
    seen = []

    def handler(query):
        seen.append(query)
        return {"entities": [{"id": "x", "name": "Person"}]}

    client = make_client(handler)
    dashed = str(uuid.UUID(TYPES["type"]))
    rows = queries.entities_by_type(client, ROOT_SPACE_ID, dashed, first=3)

    assert rows == [{"id": "x", "name": "Person"}]
    assert f'typeId: "{TYPES["type"]}"' in seen[0]
    assert "first: 3" in seen[0]


def test_query_arguments_are_validated(make_client):
    client = make_client(lambda q: {})
    with pytest.raises(ValidationError):
        queries.list_entities(client, ROOT_SPACE_ID, order_by="NAME; drop")
    with pytest.raises(ValidationError):
        queries.list_entities(client, ROOT_SPACE_ID, first=0)
    with pytest.raises(ValidationError):
        queries.space_info(client, 'x") { id } #')
    with pytest.raises(ValidationError):
        queries.spaces_by_address(client, "0x123")
    assert client.session.calls == []


def test_missing_rows_become_empty(make_client):
    client = make_client(lambda q: {})
    assert queries.space_info(client, ROOT_SPACE_ID) is None
    assert queries.list_entities(client, ROOT_SPACE_ID) == []
    assert queries.entity_details(client, TYPES["person"], ROOT_SPACE_ID) == {
        "values": [],
        "relations": [],
    }
    assert queries.backlinks(client, TYPES["type"], ROOT_SPACE_ID) == []


def test_scalar_of_picks_the_populated_column():
    assert queries.scalar_of({"text": None, "integer": 4}) == 4
    assert queries.scalar_of({"boolean": False}) is False
    assert queries.scalar_of({}) == "(complex)"
