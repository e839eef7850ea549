import json

from feedback_api.schemas.forms import FormField
from feedback_api.services.json_column import (
    DecodeStatus,
    decode_fields,
    decode_response_data,
    encode_fields,
    encode_response_data,
)


def _fields():
    return [
        FormField(id="q1", type="text", label="Name", required=True, placeholder="Your name", order=1),
        FormField(id="q2", type="select", label="Rating", options=["good", "bad"], order=2),
    ]


def test_empty_field_list_is_stored_as_null():
    assert encode_fields([]) is None
    assert encode_fields(None) is None


def test_fields_survive_storage():
    raw = encode_fields(_fields())
    assert json.loads(raw)[1]["options"] == ["good", "bad"]

    decoded = decode_fields(raw)
    assert decoded.status is DecodeStatus.OK
    assert decoded.value == _fields()


def test_null_column_is_empty_not_corrupt():
    decoded = decode_fields(None)
    assert decoded.value == []
    assert decoded.status is DecodeStatus.EMPTY
    assert not decoded.corrupt


def test_corrupt_fields_decode_to_empty_and_are_flagged():
    for raw in ("{not json", '{"id": "q1"}', '[{"id": 1, "type": "text"}]'):
        decoded = decode_fields(raw)
        assert decoded.value == []
        assert decoded.corrupt


def test_response_data_keeps_arbitrary_json_values():
    data = {"email": "x@y.com", "q1": "answer", "q2": ["a", "b"], "q3": 4, "q4": {"nested": True}, "q5": None}
    decoded = decode_response_data(encode_response_data(data))
    assert decoded.status is DecodeStatus.OK
    assert decoded.value == data


def test_corrupt_response_data_decodes_to_empty():
    decoded = decode_response_data("[1, 2")
    assert decoded.value == {}
    assert decoded.status is DecodeStatus.CORRUPT
    assert decode_response_data("").status is DecodeStatus.EMPTY
