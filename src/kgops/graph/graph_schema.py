from __future__ import annotations

import base64
import binascii
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np

from kgops.errors import ValidationError
from kgops.utils.ids import new_id, normalize_id

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """
    Scalar kinds a value may carry. Exactly one per value.
    """

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    BYTES = "bytes"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    SCHEDULE = "schedule"
    POINT = "point"
    RECT = "rect"
    EMBEDDING = "embedding"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, kind: "ValueKind | str") -> "ValueKind":
        try:
            return cls(kind)
        except ValueError:
            raise ValidationError("unknown value kind", kind=kind) from None


@dataclass(frozen=True)
class Point:
    """
    Geographic point in degrees.
    """

    lon: float
    lat: float
    alt: Optional[float] = None

    def to_list(self) -> list:
        if self.alt is None:
            return [self.lon, self.lat]
        return [self.lon, self.lat, self.alt]


@dataclass(frozen=True)
class Rect:
    """
    Bounding rectangle in degrees.
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def to_list(self) -> list:
        return [self.min_lon, self.min_lat, self.max_lon, self.max_lat]


# ---------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float, np.integer, np.floating)) and not isinstance(
        raw, (bool, np.bool_)
    )


def _coerce_boolean(raw: Any) -> bool:
    if isinstance(raw, (bool, np.bool_)):
        return bool(raw)
    raise ValidationError("expected a boolean", value=raw)


def _coerce_integer(raw: Any) -> int:
    if isinstance(raw, (bool, np.bool_)) or not isinstance(raw, (int, np.integer)):
        raise ValidationError("expected an integer", value=raw)
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValidationError("integer outside the 64-bit range", value=raw)
    return value


def _coerce_float(raw: Any) -> float:
    if not _is_number(raw):
        raise ValidationError("expected a float", value=raw)
    return float(raw)


def _coerce_decimal(raw: Any) -> Decimal:
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int) and not isinstance(raw, bool):
        value = Decimal(raw)
    elif isinstance(raw, str):
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            raise ValidationError("expected a decimal string", value=raw) from None
    else:
        raise ValidationError("expected a decimal", value=raw)
    if not value.is_finite():
        raise ValidationError("decimal must be finite", value=raw)
    return value


def _coerce_text(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValidationError("expected text", value=raw)
    return raw


def _coerce_bytes(raw: Any) -> bytes:
    if not isinstance(raw, (bytes, bytearray)):
        raise ValidationError("expected bytes", value=raw)
    return bytes(raw)


def _coerce_date(raw: Any) -> date:
    if isinstance(raw, datetime):
        raise ValidationError("expected a date, not a timestamp", value=raw)
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            raise ValidationError("expected an RFC 3339 date", value=raw) from None
    raise ValidationError("expected a date", value=raw)


def _coerce_time(raw: Any) -> time:
    if isinstance(raw, time):
        return raw
    if isinstance(raw, str):
        try:
            return time.fromisoformat(raw.strip())
        except ValueError:
            raise ValidationError("expected an ISO time", value=raw) from None
    raise ValidationError("expected a time of day", value=raw)


def _coerce_datetime(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.strip())
        except ValueError:
            raise ValidationError("expected an ISO timestamp", value=raw) from None
    raise ValidationError("expected a timestamp", value=raw)


def _coerce_schedule(raw: Any) -> str:
    if not isinstance(raw, str) or "FREQ=" not in raw.upper():
        raise ValidationError("expected an iCalendar recurrence rule", value=raw)
    return raw


def _coerce_point(raw: Any) -> Point:
    if isinstance(raw, Point):
        return raw
    if isinstance(raw, (list, tuple)) and len(raw) in (2, 3) and all(
        _is_number(v) for v in raw
    ):
        lon, lat = float(raw[0]), float(raw[1])
        alt = float(raw[2]) if len(raw) == 3 else None
        if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
            raise ValidationError("point outside valid coordinates", value=raw)
        return Point(lon=lon, lat=lat, alt=alt)
    raise ValidationError("expected a point [lon, lat(, alt)]", value=raw)


def _coerce_rect(raw: Any) -> Rect:
    if isinstance(raw, Rect):
        rect = raw
    elif isinstance(raw, (list, tuple)) and len(raw) == 4 and all(
        _is_number(v) for v in raw
    ):
        rect = Rect(*(float(v) for v in raw))
    else:
        raise ValidationError(
            "expected a rectangle [min_lon, min_lat, max_lon, max_lat]", value=raw
        )
    if rect.min_lon > rect.max_lon or rect.min_lat > rect.max_lat:
        raise ValidationError("rectangle minimum exceeds maximum", value=raw)
    return rect


def _coerce_embedding(raw: Any) -> Tuple[float, ...]:
    if isinstance(raw, (str, bytes)) or raw is None:
        raise ValidationError("expected a numeric vector", value=raw)
    try:
        arr = np.asarray(raw, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValidationError("expected a numeric vector", value=raw) from None
    if arr.ndim != 1 or arr.size == 0:
        raise ValidationError("vector must be one-dimensional and non-empty")
    if not np.all(np.isfinite(arr)):
        raise ValidationError("vector must be finite")
    return tuple(float(v) for v in arr)


_COERCERS: Dict[ValueKind, Callable[[Any], Any]] = {
    ValueKind.BOOLEAN: _coerce_boolean,
    ValueKind.INTEGER: _coerce_integer,
    ValueKind.FLOAT: _coerce_float,
    ValueKind.DECIMAL: _coerce_decimal,
    ValueKind.TEXT: _coerce_text,
    ValueKind.BYTES: _coerce_bytes,
    ValueKind.DATE: _coerce_date,
    ValueKind.TIME: _coerce_time,
    ValueKind.DATETIME: _coerce_datetime,
    ValueKind.SCHEDULE: _coerce_schedule,
    ValueKind.POINT: _coerce_point,
    ValueKind.RECT: _coerce_rect,
    ValueKind.EMBEDDING: _coerce_embedding,
}


def coerce_scalar(kind: ValueKind | str, raw: Any) -> Any:
    return _COERCERS[ValueKind.parse(kind)](raw)


def scalar_to_json(kind: ValueKind, value: Any) -> Any:
    if kind is ValueKind.DECIMAL:
        return str(value)
    if kind is ValueKind.BYTES:
        return base64.b64encode(value).decode("ascii")
    if kind in (ValueKind.DATE, ValueKind.TIME, ValueKind.DATETIME):
        return value.isoformat()
    if kind in (ValueKind.POINT, ValueKind.RECT):
        return value.to_list()
    if kind is ValueKind.EMBEDDING:
        return list(value)
    if kind is ValueKind.FLOAT and not math.isfinite(value):
        return repr(value)
    return value


def scalar_from_json(kind: ValueKind, raw: Any) -> Any:
    if kind is ValueKind.BYTES:
        if not isinstance(raw, str):
            raise ValidationError("expected base64 text for bytes", value=raw)
        try:
            raw = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("invalid base64 for bytes", value=raw) from None
    elif kind is ValueKind.FLOAT and isinstance(raw, str):
        try:
            raw = float(raw)
        except ValueError:
            raise ValidationError("expected a float", value=raw) from None
    return coerce_scalar(kind, raw)


# ---------------------------------------------------------------------
# Values and relations
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class Value:
    """
    A typed scalar stored on an entity under a property.
    """

    property: str
    kind: ValueKind
    value: Any

    @staticmethod
    def create(property: str, kind: ValueKind | str, value: Any) -> "Value":
        parsed = ValueKind.parse(kind)
        return Value(
            property=normalize_id(property),
            kind=parsed,
            value=coerce_scalar(parsed, value),
        )

    @staticmethod
    def from_input(raw: "Value | Mapping[str, Any]") -> "Value":
        """
        Accepts a Value or a mapping with `property`, `kind` (or `type`)
        and `value` keys.
        """
        if isinstance(raw, Value):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError("expected a value mapping", value=raw)
        kind = raw.get("kind", raw.get("type"))
        if "property" not in raw or kind is None or "value" not in raw:
            raise ValidationError("value needs property, kind and value", value=raw)
        return Value.create(raw["property"], kind, raw["value"])

    def as_array(self) -> np.ndarray:
        if self.kind is not ValueKind.EMBEDDING:
            raise ValidationError("value is not an embedding", kind=self.kind.value)
        return np.asarray(self.value, dtype=np.float64)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property": self.property,
            "kind": self.kind.value,
            "value": scalar_to_json(self.kind, self.value),
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Value":
        kind = ValueKind.parse(data.get("kind"))
        return Value(
            property=normalize_id(data.get("property")),
            kind=kind,
            value=scalar_from_json(kind, data.get("value")),
        )


@dataclass(frozen=True)
class RelationSpec:
    """
    One outgoing relation requested on a new entity or relation.

    `sub_relations` maps a relation type to further targets whose
    source is the relation created from this target.
    """

    to_entity: str
    position: Optional[str] = None
    sub_relations: Optional[Mapping[str, Any]] = None
    id: Optional[str] = None

    @staticmethod
    def from_input(raw: "RelationSpec | Mapping[str, Any] | str") -> "RelationSpec":
        if isinstance(raw, RelationSpec):
            return raw
        if isinstance(raw, str):
            return RelationSpec(to_entity=raw)
        if not isinstance(raw, Mapping):
            raise ValidationError("expected a relation target", value=raw)
        to_entity = raw.get("to_entity", raw.get("toEntity"))
        if to_entity is None:
            raise ValidationError("relation target needs to_entity", value=raw)
        return RelationSpec(
            to_entity=to_entity,
            position=raw.get("position"),
            sub_relations=raw.get("sub_relations", raw.get("entityRelations")),
            id=raw.get("id"),
        )


@dataclass(frozen=True)
class Relation:
    """
    Directed, typed edge. Its id is addressable like any entity id.
    """

    id: str
    from_entity: str
    type: str
    to_entity: str
    position: Optional[str] = None

    @staticmethod
    def create(
        from_entity: str,
        to_entity: str,
        type: str,
        position: Optional[str] = None,
        id: Optional[str] = None,
    ) -> "Relation":
        return Relation(
            id=normalize_id(id) if id is not None else new_id(),
            from_entity=normalize_id(from_entity),
            type=normalize_id(type),
            to_entity=normalize_id(to_entity),
            position=position,
        )


@dataclass(frozen=True)
class EntityState:
    """
    Replayed view of one entity: values per property plus type ids.
    """

    id: str
    values: Dict[str, list] = field(default_factory=dict)
    types: Tuple[str, ...] = ()

    def first(self, property: str, default: Any = None) -> Any:
        vals = self.values.get(property) or []
        return vals[0].value if vals else default
