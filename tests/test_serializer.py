import io
import struct

import pytest

from eventstream.errors import MofkaError
from eventstream.serializer import (
    DefaultSerializer,
    Serializer,
    register_serializer,
    serializer_from_metadata,
)


def test_round_trip_single():
    s = DefaultSerializer()
    buf = io.BytesIO()
    md = {"x": 1, "y": 2.3, "z": ["a", None, True]}
    s.serialize(buf, md)
    buf.seek(0)
    assert s.deserialize(buf) == md


def test_round_trip_several_in_sequence():
    s = DefaultSerializer()
    buf = io.BytesIO()
    items = [{"a": 1}, {"b": "text"}, {}]
    for item in items:
        s.serialize(buf, item)
    buf.seek(0)
    assert [s.deserialize(buf) for _ in items] == items
    assert buf.read() == b""


def test_wire_format_is_length_then_compact_json():
    s = DefaultSerializer()
    buf = io.BytesIO()
    s.serialize(buf, {"x": 1, "y": 2.3})
    payload = b'{"x":1,"y":2.3}'
    assert buf.getvalue() == struct.pack("<Q", len(payload)) + payload


def test_keys_are_sorted():
    s = DefaultSerializer()
    buf = io.BytesIO()
    s.serialize(buf, {"b": 1, "a": 2})
    assert buf.getvalue()[8:] == b'{"a":2,"b":1}'


def test_json_text_metadata_is_accepted():
    s = DefaultSerializer()
    buf = io.BytesIO()
    s.serialize(buf, '{"x":1,"y":2.3}')
    buf.seek(0)
    assert s.deserialize(buf) == {"x": 1, "y": 2.3}


def test_deserialize_invalid_json():
    payload = b'{"x":1,"y":'
    buf = io.BytesIO(struct.pack("<Q", len(payload)) + payload)
    with pytest.raises(MofkaError, match="Could not deserialize Serializer metadata"):
        DefaultSerializer().deserialize(buf)


def test_deserialize_truncated_input():
    with pytest.raises(MofkaError):
        DefaultSerializer().deserialize(io.BytesIO(b"\x01\x02"))
    buf = io.BytesIO(struct.pack("<Q", 100) + b"{}")
    with pytest.raises(MofkaError):
        DefaultSerializer().deserialize(buf)


def test_metadata_and_factory():
    s = DefaultSerializer.create({})
    assert s.metadata() == {"type": "default"}
    again = serializer_from_metadata(s.metadata())
    assert isinstance(again, DefaultSerializer)


def test_from_metadata_without_type_is_default():
    from_dict = serializer_from_metadata({})
    from_text = serializer_from_metadata("{}")
    assert isinstance(from_dict, DefaultSerializer)
    assert isinstance(from_text, DefaultSerializer)
    assert from_dict.metadata() == {"type": "default"}
    assert from_text.metadata() == {"type": "default"}


def test_from_metadata_errors():
    with pytest.raises(MofkaError, match="expected JSON object"):
        serializer_from_metadata("[1,2]")
    with pytest.raises(MofkaError, match="expected string"):
        serializer_from_metadata({"type": False})
    with pytest.raises(MofkaError):
        serializer_from_metadata({"type": "unknown"})


def test_register_custom_serializer():
    class Lines(Serializer):
        def serialize(self, stream, metadata):
            stream.write(metadata.encode() + b"\n")

        def deserialize(self, stream):
            return stream.readline().rstrip(b"\n").decode()

        def metadata(self):
            return {"type": "test-lines"}

    register_serializer("test-lines", lambda config: Lines())
    s = serializer_from_metadata({"type": "test-lines"})
    assert s.metadata() == {"type": "test-lines"}
    buf = io.BytesIO()
    s.serialize(buf, "hello")
    buf.seek(0)
    assert s.deserialize(buf) == "hello"