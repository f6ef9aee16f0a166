import pytest

from eventstream.params import BatchSize, MaxNumBatches, NumEvents, Ordering


def test_adaptive_is_size_max():
    assert BatchSize.adaptive() == BatchSize(2**64 - 1)
    assert BatchSize.adaptive() > BatchSize(1_000_000)


def test_infinity_values_are_maximal():
    assert MaxNumBatches.infinity() == MaxNumBatches(2**64 - 1)
    assert NumEvents.infinity().value == 2**64 - 1
    assert NumEvents.infinity() >= NumEvents(123)


@pytest.mark.parametrize("cls", [BatchSize, MaxNumBatches, NumEvents])
def test_ordering_operators(cls):
    small, big = cls(2), cls(5)
    assert small < big
    assert big > small
    assert small <= cls(2)
    assert big >= cls(5)
    assert small == cls(2)
    assert small != big


@pytest.mark.parametrize("cls", [BatchSize, MaxNumBatches, NumEvents])
def test_out_of_range_rejected(cls):
    with pytest.raises(ValueError):
        cls(-1)
    with pytest.raises(ValueError):
        cls(2**64)


def test_non_integer_rejected():
    with pytest.raises(TypeError):
        BatchSize(1.5)


def test_ordering_values():
    assert Ordering.STRICT.value is True
    assert Ordering.LOOSE.value is False
    assert Ordering(True) is Ordering.STRICT