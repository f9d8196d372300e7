from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from kgops.registry import ROOT_SPACE_ID, TYPES
from kgops.remote import queries
from kgops.remote.graphql_client import GraphQLClient
from kgops.utils.text import preview


class ExploreService:
    """
    Read-only walk through the knowledge graph API.

    Each demo logs what it found and returns the raw rows so callers
    and tests can inspect them.
    """

    def __init__(
        self,
        client: GraphQLClient,
        *,
        demo_space_id: Optional[str] = None,
    ) -> None:
        self.client = client
        self.demo_space_id = demo_space_id
        self.logger = logging.getLogger("kgops.demo.explore")

    def run_all(self) -> Dict[str, Any]:
        results: Dict[str, Any] = {
            "root_space": self.root_space(),
            "recent_entities": self.recent_entities(),
            "type_definitions": self.type_definitions(),
            "person_details": self.person_details(),
        }
        if self.demo_space_id:
            results["demo_space"] = self.demo_space()
        else:
            self.logger.info("DEMO_SPACE_ID not set; skipping demo space overview")
        results["type_backlinks"] = self.type_backlinks()
        return results

    # ------------------------------------------------------------------
    # Demos
    # ------------------------------------------------------------------

    def root_space(self) -> Optional[Dict[str, Any]]:
        self.logger.info("== root space ==")
        space = queries.space_info(self.client, ROOT_SPACE_ID)
        if not space:
            self.logger.warning("root space not found")
            return None
        page = space.get("page") or {}
        self.logger.info("id: %s  type: %s", space.get("id"), space.get("type"))
        self.logger.info("address: %s", space.get("address"))
        self.logger.info("name: %s", page.get("name") or "(unnamed)")
        return space

    def recent_entities(self, first: int = 10) -> List[Dict[str, Any]]:
        self.logger.info("== %s most recently updated entities ==", first)
        entities = queries.list_entities(self.client, ROOT_SPACE_ID, first=first)
        for entity in entities:
            self.logger.info(
                "%s  %s  types: %s",
                entity.get("id"),
                entity.get("name"),
                len(entity.get("typeIds") or []),
            )
        return entities

    def type_definitions(self, first: int = 15) -> List[Dict[str, Any]]:
        self.logger.info("== type definitions ==")
        types = queries.entities_by_type(
            self.client, ROOT_SPACE_ID, TYPES["type"], first=first
        )
        for entity in types:
            self.logger.info(
                "%s  %s  %s",
                entity.get("id"),
                entity.get("name"),
                preview(entity.get("description")),
            )
        return types

    def person_details(self) -> Dict[str, List[Dict[str, Any]]]:
        self.logger.info("== values and relations of the Person type ==")
        details = queries.entity_details(self.client, TYPES["person"], ROOT_SPACE_ID)
        for value in details["values"]:
            name = (value.get("propertyEntity") or {}).get("name") or value.get("propertyId")
            self.logger.info("value  %s = %s", name, queries.scalar_of(value))
        for relation in details["relations"]:
            type_name = (relation.get("typeEntity") or {}).get("name") or relation.get("typeId")
            target = (relation.get("toEntity") or {}).get("name") or relation.get("toEntityId")
            self.logger.info(
                "relation  %s -> %s  pos: %s", type_name, target, relation.get("position")
            )
        return details

    def demo_space(self) -> Dict[str, Any]:
        self.logger.info("== demo space %s ==", self.demo_space_id)
        overview = queries.space_overview(self.client, self.demo_space_id)
        space = overview["space"]
        if not space:
            self.logger.warning("demo space not found")
        for entity in overview["entities"]:
            self.logger.info("%s  %s", entity.get("id"), entity.get("name"))
        return overview

    def type_backlinks(self, first: int = 15) -> List[Dict[str, Any]]:
        self.logger.info("== backlinks to the Type entity ==")
        links = queries.backlinks(self.client, TYPES["type"], ROOT_SPACE_ID, first=first)
        for link in links:
            source = (link.get("fromEntity") or {}).get("name") or link.get("fromEntityId")
            type_name = (link.get("typeEntity") or {}).get("name") or link.get("typeId")
            self.logger.info("%s  via %s", source, type_name)
        return links
