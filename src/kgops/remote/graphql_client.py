from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from kgops.config.settings import ClientConfig
from kgops.errors import GraphQLError, NetworkError


class GraphQLClient:
    """
    Thin request/response client for the knowledge graph API.

    One POST per call, no retry: failures surface as NetworkError or
    GraphQLError and the caller decides what to do.
    """

    def __init__(
        self,
        api_url: str,
        *,
        timeout_s: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
    ) -> "GraphQLClient":
        return cls(config.api_url, timeout_s=config.timeout_s, session=session)

    def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        logger = logging.getLogger("kgops.remote")

        payload: Dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        try:
            r = self.session.post(
                self.api_url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_s,
            )
        except requests.exceptions.RequestException as exc:
            raise NetworkError(
                "request to graph API failed", url=self.api_url, reason=str(exc)
            ) from exc

        if not r.ok:
            raise NetworkError(
                f"API error: {r.status_code} {r.reason}",
                url=self.api_url,
                status=r.status_code,
            )

        try:
            body = r.json()
        except ValueError as exc:
            raise NetworkError(
                "API answered with invalid JSON", url=self.api_url
            ) from exc

        if not isinstance(body, dict):
            raise NetworkError("API answered with unexpected JSON", url=self.api_url)

        errors = body.get("errors")
        if errors:
            logger.error("GraphQL errors: %s", json.dumps(errors, indent=2))
            first = errors[0] if isinstance(errors[0], dict) else {"message": str(errors[0])}
            raise GraphQLError(f"GraphQL: {first.get('message')}", errors=errors)

        return body.get("data") or {}

    def close(self) -> None:
        self.session.close()
