from datetime import date, datetime, time
from decimal import Decimal

import numpy as np
import pytest

from kgops.errors import ValidationError
from kgops.graph.graph_schema import Point, Rect, Value, ValueKind, coerce_scalar
from kgops.utils.ids import new_id

PROP = new_id()


def test_integer_range_and_type():
    assert coerce_scalar("integer", 2**63 - 1) == 2**63 - 1
    assert coerce_scalar("integer", np.int32(7)) == 7
    with pytest.raises(ValidationError):
        coerce_scalar("integer", 2**63)
    with pytest.raises(ValidationError):
        coerce_scalar("integer", True)
    with pytest.raises(ValidationError):
        coerce_scalar("integer", 1.5)


def test_date_time_and_datetime():
    assert coerce_scalar("date", "2015-07-30") == date(2015, 7, 30)
    with pytest.raises(ValidationError):
        coerce_scalar("date", datetime(2015, 7, 30, 12, 0))
    with pytest.raises(ValidationError):
        coerce_scalar("date", "30/07/2015")
    assert coerce_scalar("time", "12:30:00") == time(12, 30)
    assert coerce_scalar("datetime", "2015-07-30T12:00:00") == datetime(2015, 7, 30, 12)


def test_decimal_keeps_precision():
    value = Value.create(PROP, ValueKind.DECIMAL, "0.10000000000000000001")
    assert value.value == Decimal("0.10000000000000000001")
    assert value.to_dict()["value"] == "0.10000000000000000001"
    with pytest.raises(ValidationError):
        coerce_scalar("decimal", "NaN")


def test_schedule_needs_a_recurrence_rule():
    assert coerce_scalar("schedule", "FREQ=WEEKLY;BYDAY=MO")
    with pytest.raises(ValidationError):
        coerce_scalar("schedule", "every monday")


def test_point_and_rect():
    assert coerce_scalar("point", [13.4, 52.5]) == Point(lon=13.4, lat=52.5)
    with pytest.raises(ValidationError):
        coerce_scalar("point", [200.0, 0.0])
    assert coerce_scalar("rect", [0, 0, 1, 1]) == Rect(0.0, 0.0, 1.0, 1.0)
    with pytest.raises(ValidationError):
        coerce_scalar("rect", [1, 1, 0, 0])


def test_embedding_is_a_finite_vector():
    value = Value.create(PROP, "embedding", np.array([0.5, 1.0, 2.0], dtype=np.float32))
    assert value.value == (0.5, 1.0, 2.0)
    np.testing.assert_allclose(value.as_array(), [0.5, 1.0, 2.0])
    with pytest.raises(ValidationError):
        coerce_scalar("embedding", [])
    with pytest.raises(ValidationError):
        coerce_scalar("embedding", [1.0, float("nan")])
    with pytest.raises(ValidationError):
        coerce_scalar("embedding", [[1.0], [2.0]])


def test_as_array_only_for_embeddings():
    with pytest.raises(ValidationError):
        Value.create(PROP, "text", "hello").as_array()


def test_bytes_travel_as_base64():
    value = Value.create(PROP, "bytes", b"\x00\xffkg")
    data = value.to_dict()
    assert data == {"property": PROP, "kind": "bytes", "value": "AP9rZw=="}
    assert Value.from_dict(data) == value


def test_unknown_kind_and_mismatched_scalar():
    with pytest.raises(ValidationError):
        ValueKind.parse("complex")
    with pytest.raises(ValidationError):
        Value.create(PROP, "boolean", "yes")
    with pytest.raises(ValidationError):
        Value.create(PROP, "text", 12)


def test_from_input_accepts_type_alias():
    value = Value.from_input({"property": PROP, "type": "float", "value": 2})
    assert value.kind is ValueKind.FLOAT
    assert value.value == 2.0
    with pytest.raises(ValidationError):
        Value.from_input({"property": PROP, "value": 2})
