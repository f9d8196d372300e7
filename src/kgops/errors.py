"""
Exceptions raised by kgops, all inheriting from KgopsError.

Errors carry keyword info alongside the message so callers can
inspect what failed without parsing text:

    try:
        publisher.publish(ops, "edit")
    except AuthorizationError as e:
        e.get("caller_space_id")
"""

from __future__ import annotations

from typing import Any, Dict


class KgopsError(Exception):

    def __init__(self, mesg: str = "", **info: Any) -> None:
        self.mesg = mesg
        self.errinfo: Dict[str, Any] = info
        super().__init__(self._get_message())

    def _get_message(self) -> str:
        props = sorted(self.errinfo.items())
        displ = " ".join(f"{k}={v!r}" for k, v in props)
        if self.mesg and displ:
            return f"{self.mesg} ({displ})"
        return self.mesg or displ

    def get(self, name: str, default: Any = None) -> Any:
        return self.errinfo.get(name, default)

    def items(self) -> Dict[str, Any]:
        return dict(self.errinfo)


class ValidationError(KgopsError):
    """Malformed local input: wrong scalar kind, bad id, bad bounds."""


class UnknownIdentifierError(KgopsError, KeyError):
    """A symbolic name is missing from the identifier registry."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class RecordError(ValidationError):
    """A persisted batch record or input record file is unreadable."""


class NetworkError(KgopsError):
    """The remote API could not be reached or answered with an HTTP error."""


class GraphQLError(NetworkError):
    """The remote API answered with a GraphQL `errors` payload."""


class AuthorizationError(KgopsError):
    """The acting identity has no standing to edit the target space."""


class SpaceNotFoundError(KgopsError):
    """The target space does not exist on the remote API."""
