import pytest

from eventstream.dataview import DataView
from eventstream.errors import MofkaError
from eventstream.event import Event


class _FakeEvent:
    def __init__(self, metadata, data, partition, event_id):
        self._metadata = metadata
        self._data = data
        self._partition = partition
        self._id = event_id
        self.acked = 0

    def metadata(self):
        return self._metadata

    def data(self):
        return self._data

    def partition(self):
        return self._partition

    def id(self):
        return self._id

    def acknowledge(self):
        self.acked += 1


def test_null_event_is_invalid():
    event = Event()
    assert not event
    for method in (event.metadata, event.data, event.partition, event.id, event.acknowledge):
        with pytest.raises(MofkaError):
            method()


def test_event_delegates_to_implementation():
    data = DataView(bytearray(b"payload"))
    impl = _FakeEvent({"x": 1}, data, {"p": 0}, 7)
    event = Event(impl)
    assert bool(event) is True
    assert event.metadata() == {"x": 1}
    assert event.data() is data
    assert event.data().read(7) == b"payload"
    assert event.partition() == {"p": 0}
    assert event.id() == 7


def test_acknowledge_reaches_implementation():
    impl = _FakeEvent({}, DataView(), {}, 0)
    event = Event(impl)
    event.acknowledge()
    event.acknowledge()
    assert impl.acked == 2