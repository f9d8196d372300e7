from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping

from kgops.errors import UnknownIdentifierError
from kgops.utils.ids import derived_id

# ---------------------------------------------------------------------
# Root ontology (system types and properties defined in the root space)
# ---------------------------------------------------------------------

ROOT_SPACE_ID = "a19c345ab9866679b001d7d2138d88a1"

TYPES: Mapping[str, str] = MappingProxyType(
    {
        "type": "e7d737c536764c609fa16aa64a8c90ad",
        "property": "808a04ceb21c4d888ad12e240613e5ca",
        "person": "7ed45f2bc48b419e8e4664d5ff680b0d",
        "project": "484a18c5030a499cb0f2ef588ff16d50",
        "topic": "5ef5a5860f274d8e8f6c59ae5b3e89e2",
        "text_block": "76474f2f00894e77a0410b39fb17d0bf",
        "data_block": "b8803a8665de412bbb357e0c84adf473",
        "image": "ba4e41460010499da0a3caaa7f579d0e",
    }
)

PROPERTIES: Mapping[str, str] = MappingProxyType(
    {
        "name": "a126ca530c8e48d5b88882c734c38935",
        "description": "9b1f76ff9711404c861e59dc3fa7d037",
        "types": "8f151ba4de204e3c9cb499ddf96f48f1",
        "web_url": "eed38e74e67946bf8a42ea3e4f8fb5fb",
        "birth_date": "60f8b943d9a742109356fc108ee7212c",
        "date_founded": "41aa3d9847b64a97b7ec427e575b910e",
        "topics": "458fbc070dbf4c928f5716f3fdde7c32",
        "blocks": "beaba5cba67741a8b35377030613fc70",
        "markdown_content": "e3e363d1dd294ccb8e6ff3b76d99bc33",
        "data_source_type": "1f69cc9880d444abad493df6a7b15ee4",
        "filter": "14a46854bfd14b1882152785c2dab9f3",
        "collection_item": "a99f9ce12ffa4dac8c61f6310d46064a",
        "view": "1907fd1c81114a3ca378b1f353425b65",
    }
)

QUERY_DATA_SOURCE = "3b069b04adbe4728917d1283fd4ac27e"
COLLECTION_DATA_SOURCE = "1295037a5d9c4d09b27c5502654b9177"

VIEWS: Mapping[str, str] = MappingProxyType(
    {
        "table": "cba271cef7c140339047614d174c69f1",
        "list": "7d497dba09c249b8968f716bcf520473",
        "gallery": "ccb70fc917f04a54b86e3b4d20cc7130",
        "bullets": "0aaac6f7c916403eaf6d2e086dc92ada",
    }
)

# ---------------------------------------------------------------------
# Local slots
#
# Ids for slots the root list above does not name. They are derived from
# the slot name so every process agrees on them.
# ---------------------------------------------------------------------

LOCAL_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "video": derived_id("type:video"),
        "pdf": derived_id("type:pdf"),
    }
)

LOCAL_PROPERTIES: Mapping[str, str] = MappingProxyType(
    {
        "properties": derived_id("property:properties"),
        "data_type": derived_id("property:data type"),
        "renderable_type": derived_id("property:renderable type"),
        "avatar": derived_id("property:avatar"),
        "media_url": derived_id("property:media url"),
        "width": derived_id("property:width"),
        "height": derived_id("property:height"),
    }
)

RENDERABLE_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "url": derived_id("renderable:url"),
        "image": derived_id("renderable:image"),
        "place": derived_id("renderable:place"),
    }
)


_T = TYPES
_P = PROPERTIES
_LT = LOCAL_TYPES
_LP = LOCAL_PROPERTIES
_QDS = QUERY_DATA_SOURCE
_CDS = COLLECTION_DATA_SOURCE


class CoreId(str, Enum):
    """
    Identifiers the core conventions depend on.

    Everything else in the ontology stays an opaque id string.
    """

    TYPE = _T["type"]
    PROPERTY = _T["property"]
    TEXT_BLOCK = _T["text_block"]
    DATA_BLOCK = _T["data_block"]
    IMAGE = _T["image"]
    VIDEO = _LT["video"]
    PDF = _LT["pdf"]

    NAME = _P["name"]
    DESCRIPTION = _P["description"]
    TYPES = _P["types"]
    PROPERTIES = _LP["properties"]
    BLOCKS = _P["blocks"]
    MARKDOWN_CONTENT = _P["markdown_content"]
    DATA_SOURCE_TYPE = _P["data_source_type"]
    FILTER = _P["filter"]
    COLLECTION_ITEM = _P["collection_item"]
    VIEW = _P["view"]
    DATA_TYPE = _LP["data_type"]
    RENDERABLE_TYPE = _LP["renderable_type"]
    AVATAR = _LP["avatar"]
    MEDIA_URL = _LP["media_url"]
    WIDTH = _LP["width"]
    HEIGHT = _LP["height"]

    QUERY_DATA_SOURCE = _QDS
    COLLECTION_DATA_SOURCE = _CDS

    def __str__(self) -> str:
        return self.value


def _build_index() -> Dict[str, str]:
    index: Dict[str, str] = {"root space": ROOT_SPACE_ID}
    sections = (
        ("type", TYPES),
        ("type", LOCAL_TYPES),
        ("property", PROPERTIES),
        ("property", LOCAL_PROPERTIES),
        ("view", VIEWS),
        ("renderable", RENDERABLE_TYPES),
    )
    for kind, table in sections:
        for key, value in table.items():
            index[f"{key.replace('_', ' ')} {kind}"] = value
    index["query data source"] = QUERY_DATA_SOURCE
    index["collection data source"] = COLLECTION_DATA_SOURCE
    return index


_INDEX: Mapping[str, str] = MappingProxyType(_build_index())


def lookup(name: str) -> str:
    """
    Returns the fixed id for a symbolic name such as "person type",
    "description property" or "table view".
    """
    key = " ".join(name.lower().replace("_", " ").split())
    try:
        return _INDEX[key]
    except KeyError:
        raise UnknownIdentifierError("unknown identifier name", name=name) from None


def known_names() -> list[str]:
    return sorted(_INDEX)
