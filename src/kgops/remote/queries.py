"""
Canned read queries against the knowledge graph API.

The API takes ids as UUID scalars (32 hex characters, no dashes).
Every id is canonicalized before it is placed into a query document,
so nothing but hex ever reaches the query text.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from kgops.errors import ValidationError
from kgops.remote.graphql_client import GraphQLClient
from kgops.utils.ids import normalize_id

ORDERINGS = frozenset(
    {"CREATED_AT_ASC", "CREATED_AT_DESC", "UPDATED_AT_ASC", "UPDATED_AT_DESC"}
)

_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")


def _first(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise ValidationError("page size must be a positive integer", first=n)
    return n


def space_info(client: GraphQLClient, space_id: str) -> Optional[Dict[str, Any]]:
    data = client.execute(
        f"""{{
  space(id: "{normalize_id(space_id)}") {{
    id
    type
    address
    topicId
    page {{
      id
      name
      description
    }}
  }}
}}"""
    )
    return data.get("space")


def list_entities(
    client: GraphQLClient,
    space_id: str,
    *,
    first: int = 10,
    order_by: str = "UPDATED_AT_DESC",
) -> List[Dict[str, Any]]:
    if order_by not in ORDERINGS:
        raise ValidationError("unknown ordering", order_by=order_by)
    data = client.execute(
        f"""{{
  entities(
    spaceId: "{normalize_id(space_id)}"
    first: {_first(first)}
    filter: {{ name: {{ isNull: false }} }}
    orderBy: {order_by}
  ) {{
    id
    name
    description
    typeIds
    createdAt
    updatedAt
  }}
}}"""
    )
    return data.get("entities") or []


def entities_by_type(
    client: GraphQLClient,
    space_id: str,
    type_id: str,
    *,
    first: int = 15,
) -> List[Dict[str, Any]]:
    data = client.execute(
        f"""{{
  entities(
    spaceId: "{normalize_id(space_id)}"
    typeId: "{normalize_id(type_id)}"
    first: {_first(first)}
    filter: {{ name: {{ isNull: false }} }}
  ) {{
    id
    name
    description
  }}
}}"""
    )
    return data.get("entities") or []


def entity_details(
    client: GraphQLClient,
    entity_id: str,
    space_id: str,
    *,
    first: int = 20,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Values (property-value triples) and outgoing relations of one entity.
    """
    entity_id = normalize_id(entity_id)
    space_id = normalize_id(space_id)
    data = client.execute(
        f"""{{
  values(
    filter: {{
      entityId: {{ is: "{entity_id}" }}
      spaceId: {{ is: "{space_id}" }}
    }}
  ) {{
    propertyId
    text
    integer
    float
    boolean
    date
    datetime
    propertyEntity {{ name }}
  }}
  relations(
    filter: {{
      fromEntityId: {{ is: "{entity_id}" }}
      spaceId: {{ is: "{space_id}" }}
    }}
    first: {_first(first)}
  ) {{
    id
    typeId
    toEntityId
    position
    typeEntity {{ name }}
    toEntity {{ name }}
  }}
}}"""
    )
    return {
        "values": data.get("values") or [],
        "relations": data.get("relations") or [],
    }


def space_overview(
    client: GraphQLClient,
    space_id: str,
    *,
    first: int = 20,
) -> Dict[str, Any]:
    space_id = normalize_id(space_id)
    data = client.execute(
        f"""{{
  space(id: "{space_id}") {{
    id
    type
    address
    page {{ name description }}
  }}
  entities(
    spaceId: "{space_id}"
    first: {_first(first)}
    filter: {{ name: {{ isNull: false }} }}
  ) {{
    id
    name
    description
    typeIds
  }}
}}"""
    )
    return {"space": data.get("space"), "entities": data.get("entities") or []}


def backlinks(
    client: GraphQLClient,
    entity_id: str,
    space_id: str,
    *,
    first: int = 15,
) -> List[Dict[str, Any]]:
    """
    Relations pointing at `entity_id` (reverse relations).
    """
    data = client.execute(
        f"""{{
  relations(
    filter: {{
      toEntityId: {{ is: "{normalize_id(entity_id)}" }}
      spaceId: {{ is: "{normalize_id(space_id)}" }}
    }}
    first: {_first(first)}
  ) {{
    fromEntityId
    typeId
    fromEntity {{ name }}
    typeEntity {{ name }}
  }}
}}"""
    )
    return data.get("relations") or []


def spaces_by_address(client: GraphQLClient, address: str) -> List[Dict[str, Any]]:
    if not isinstance(address, str) or not _ADDRESS.match(address):
        raise ValidationError("invalid wallet address", address=address)
    data = client.execute(
        f"""{{
  spaces(filter: {{ address: {{ is: "{address}" }} }}) {{ id type }}
}}"""
    )
    return data.get("spaces") or []


def space_authority(client: GraphQLClient, space_id: str) -> Optional[Dict[str, Any]]:
    """
    Type, address, members and editors of a space.
    """
    data = client.execute(
        f"""{{
  space(id: "{normalize_id(space_id)}") {{
    type
    address
    membersList {{ memberSpaceId }}
    editorsList {{ memberSpaceId }}
  }}
}}"""
    )
    return data.get("space")


def scalar_of(value: Dict[str, Any]) -> Any:
    """
    First populated scalar column of a value row from `entity_details`.
    """
    for column in ("text", "integer", "float", "boolean", "date", "datetime"):
        if value.get(column) is not None:
            return value[column]
    return "(complex)"
