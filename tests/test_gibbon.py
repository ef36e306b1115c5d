import pytest

from gibbons import Gibbon
from gibbons.errors import (
    IllegalPositionError,
    IncomingTooBigError,
    InvalidPositionError,
    InvalidSizeError,
)


@pytest.mark.parametrize("byte_size", [0, -1, 1.0, "2", None, True])
def test_create_invalid_size(byte_size):
    with pytest.raises(InvalidSizeError):
        Gibbon.create(byte_size)


def test_create_is_empty():
    gibbon = Gibbon.create(4)
    assert gibbon.byte_length == 4
    assert len(gibbon) == 4
    assert gibbon.get_positions_array() == []
    assert gibbon.to_bytes() == b"\x00" * 4


def test_constructor_requires_bytearray():
    with pytest.raises(TypeError):
        Gibbon(b"\x00")


def test_boundary():
    Gibbon.create(1).set_position(8)
    with pytest.raises(IllegalPositionError):
        Gibbon.create(1).set_position(9)


@pytest.mark.parametrize("method", ["set_position", "clear_position", "toggle_position", "change_position", "is_position"])
def test_single_position_accessors_are_strict(method):
    gibbon = Gibbon.create(2)
    with pytest.raises(IllegalPositionError):
        getattr(gibbon, method)(17)
    with pytest.raises(InvalidPositionError):
        getattr(gibbon, method)(0)
    assert gibbon.to_bytes() == b"\x00\x00"


def test_illegal_position_is_an_index_error():
    with pytest.raises(IndexError):
        Gibbon.create(1).is_position(100)


def test_chaining_returns_same_instance():
    gibbon = Gibbon.create(2)
    assert gibbon.set_position(1) is gibbon
    assert gibbon.clear_position(1) is gibbon
    assert gibbon.toggle_position(1) is gibbon
    assert gibbon.change_position(1, True) is gibbon
    assert gibbon.set_all_from_positions([2]) is gibbon
    assert gibbon.unset_all_from_positions([2]) is gibbon


def test_set_and_clear_position():
    gibbon = Gibbon.create(2).set_position(1).set_position(10)
    assert gibbon.is_position(1)
    assert gibbon.is_position(10)
    assert not gibbon.is_position(2)
    gibbon.clear_position(10)
    assert not gibbon.is_position(10)
    assert gibbon.get_positions_array() == [1]


def test_set_position_is_idempotent():
    once = Gibbon.create(2).set_position(5)
    twice = Gibbon.create(2).set_position(5).set_position(5)
    assert once == twice


def test_toggle_twice_restores():
    gibbon = Gibbon.create(2).set_all_from_positions([3, 9])
    before = gibbon.to_bytes()
    gibbon.toggle_position(3).toggle_position(3)
    gibbon.toggle_position(4).toggle_position(4)
    assert gibbon.to_bytes() == before


def test_change_position():
    gibbon = Gibbon.create(2)
    gibbon.change_position(1, True)
    assert gibbon.is_position(1)
    gibbon.change_position(1)
    assert not gibbon.is_position(1)
    gibbon.change_position(16, True)
    assert gibbon.to_bytes() == b"\x00\x80"


def test_get_positions_array():
    gibbon = Gibbon.create(2)
    for position in (1, 2, 3, 4, 5, 6, 7, 8, 10):
        gibbon.set_position(position)
    assert gibbon.get_positions_array() == [1, 2, 3, 4, 5, 6, 7, 8, 10]
    # Restartable
    assert gibbon.get_positions_array() == [1, 2, 3, 4, 5, 6, 7, 8, 10]


def test_set_all_from_positions_signed():
    gibbon = Gibbon.create(2).set_all_from_positions([1, 2, 3])
    gibbon.set_all_from_positions([-2, 9])
    assert gibbon.get_positions_array() == [1, 3, 9]


def test_set_all_from_positions_later_entry_wins():
    gibbon = Gibbon.create(2).set_all_from_positions([1, -1])
    assert not gibbon.is_position(1)
    gibbon = Gibbon.create(2).set_all_from_positions([-1, 1])
    assert gibbon.is_position(1)


def test_set_all_from_positions_last_repeat_wins():
    assert Gibbon.create(1).set_all_from_positions([1, -1, 1]).get_positions_array() == [1]
    assert Gibbon.create(1).set_all_from_positions([-1, 1, -1]).get_positions_array() == []
    gibbon = Gibbon.create(1).set_position(2)
    assert gibbon.has_all_from_positions([2, -2, 2])
    assert not gibbon.has_all_from_positions([-2, 2, -2])


def test_set_all_from_positions_duplicates_collapse():
    gibbon = Gibbon.create(2).set_all_from_positions([4, 4, 4, 12])
    assert gibbon.get_positions_array() == [4, 12]


def test_set_all_from_positions_empty():
    gibbon = Gibbon.create(1).set_position(2)
    assert gibbon.set_all_from_positions([]).get_positions_array() == [2]
    assert gibbon.set_all_from_positions().get_positions_array() == [2]


def test_set_all_from_positions_is_atomic():
    gibbon = Gibbon.create(2).set_position(5)
    with pytest.raises(IllegalPositionError):
        gibbon.set_all_from_positions([1, 2, -5, 17])
    assert gibbon.get_positions_array() == [5]

    with pytest.raises(IllegalPositionError):
        gibbon.set_all_from_positions([-17, 3])
    assert gibbon.get_positions_array() == [5]


@pytest.mark.parametrize("positions", [[0], [1, 0], [1, 2.5], ["3"]])
def test_set_all_from_positions_invalid(positions):
    gibbon = Gibbon.create(2)
    with pytest.raises(InvalidPositionError):
        gibbon.set_all_from_positions(positions)
    assert gibbon.get_positions_array() == []


def test_unset_all_from_positions():
    gibbon = Gibbon.create(2).unset_all_from_positions([1, 2])
    assert not gibbon.has_all_from_positions([1, 2])
    assert gibbon.has_all_from_positions([-1, -2])

    gibbon = Gibbon.create(2).set_all_from_positions([1, 2, 3])
    gibbon.unset_all_from_positions([1, -4])
    assert gibbon.get_positions_array() == [2, 3, 4]


def test_unset_all_from_positions_is_atomic():
    gibbon = Gibbon.create(1).set_position(1)
    with pytest.raises(IllegalPositionError):
        gibbon.unset_all_from_positions([1, 9])
    assert gibbon.is_position(1)


def test_has_all_from_positions():
    gibbon = Gibbon.create(2).set_all_from_positions([1, 2, 3, 4, 5, 6, 7, 8])
    assert gibbon.has_all_from_positions([1, 2, 3, 4, 5, 6, 7, 8])
    assert not gibbon.has_all_from_positions([-1])
    assert not gibbon.has_all_from_positions([1, 9])
    assert gibbon.has_all_from_positions([1, -9, -16])
    assert gibbon.has_all_from_positions([])


def test_has_all_from_positions_negative():
    gibbon = Gibbon.create(2).set_position(1).set_position(2).toggle_position(1)
    assert gibbon.has_all_from_positions([-1, 2])
    assert not gibbon.has_all_from_positions([-2])


def test_has_all_from_positions_duplicates_collapse():
    gibbon = Gibbon.create(1).set_position(3)
    assert gibbon.has_all_from_positions([3, 3, 3])


def test_has_any_from_positions():
    gibbon = Gibbon.create(2).set_position(1).set_position(2).set_position(10)
    assert gibbon.has_any_from_positions([1, 9])
    assert gibbon.has_any_from_positions([9, 10])
    assert not gibbon.has_any_from_positions([9, 11])
    assert not gibbon.has_any_from_positions([])


def test_has_any_from_positions_negative():
    gibbon = Gibbon.create(1).set_all_from_positions([1, 2, 3, 4, 5, 6, 7, 8])
    assert not gibbon.has_any_from_positions([-1, -2])
    gibbon.clear_position(2)
    assert gibbon.has_any_from_positions([-1, -2])


def test_batch_queries_out_of_bounds_raise():
    gibbon = Gibbon.create(2).set_position(1).set_position(2).toggle_position(1)
    with pytest.raises(IllegalPositionError):
        gibbon.has_any_from_positions([-1, 100])
    with pytest.raises(IllegalPositionError):
        gibbon.has_all_from_positions([2, 17])


def test_batch_queries_leave_gibbon_untouched():
    gibbon = Gibbon.create(2).set_all_from_positions([1, 5])
    gibbon.has_all_from_positions([-1, 2, 5])
    gibbon.has_any_from_positions([-5, 3])
    assert gibbon.get_positions_array() == [1, 5]


def test_contains_does_not_raise():
    gibbon = Gibbon.create(1).set_position(3)
    assert 3 in gibbon
    assert 4 not in gibbon
    assert 9 not in gibbon
    assert 0 not in gibbon
    assert "3" not in gibbon


def test_equals():
    gibbon = Gibbon.create(2).set_position(3)
    assert gibbon.equals(gibbon)
    assert gibbon.equals(Gibbon.create(2).set_position(3))
    assert not gibbon.equals(Gibbon.create(2).set_position(4))


def test_equals_pads_shorter_with_zero():
    short = Gibbon.create(1).set_position(3)
    long = Gibbon.create(4).set_position(3)
    assert short.equals(long)
    assert long.equals(short)
    long.set_position(32)
    assert not short.equals(long)
    assert not long.equals(short)


def test_eq_operator():
    assert Gibbon.create(2) == Gibbon.create(3)
    assert Gibbon.create(2) != Gibbon.create(2).set_position(1)
    assert Gibbon.create(1) != b"\x00"


def test_has_all_from_gibbon():
    gibbon = Gibbon.create(10).set_all_from_positions([1, 3, 10, 11, 13])
    assert gibbon.has_all_from_gibbon(Gibbon.create(10).set_all_from_positions([1, 10, 13]))
    assert not gibbon.has_all_from_gibbon(Gibbon.create(10).set_all_from_positions([1, 2]))
    assert gibbon.has_all_from_gibbon(Gibbon.create(10))


def test_has_all_from_gibbon_compares_shared_prefix():
    short = Gibbon.create(1).set_position(1)
    long = Gibbon.create(2).set_position(1).set_position(16)
    assert short.has_all_from_gibbon(long)
    assert long.has_all_from_gibbon(short)
    assert not Gibbon.create(2).set_position(16).has_all_from_gibbon(long)


def test_has_any_from_gibbon():
    gibbon = Gibbon.create(10).set_all_from_positions([10, 11, 12])
    assert gibbon.has_any_from_gibbon(Gibbon.create(10).set_all_from_positions([11]))
    assert not gibbon.has_any_from_gibbon(Gibbon.create(10).set_all_from_positions([1, 80]))
    assert not gibbon.has_any_from_gibbon(Gibbon.create(1).set_position(1))


def test_merge_with_gibbon():
    merged = Gibbon.create(2).merge_with_gibbon(Gibbon.create(2).set_all_from_positions([10, 11, 12]))
    assert merged.get_positions_array() == [10, 11, 12]


def test_merge_into_larger_gibbon():
    target = Gibbon.create(3).set_position(20)
    result = target.merge_with_gibbon(Gibbon.create(2).set_all_from_positions([10, 11, 12]))
    assert result is target
    assert target.get_positions_array() == [10, 11, 12, 20]


def test_merge_incoming_too_big():
    target = Gibbon.create(2).set_position(1)
    with pytest.raises(IncomingTooBigError):
        target.merge_with_gibbon(Gibbon.create(3).set_all_from_positions([10, 11, 12]))
    assert target.get_positions_array() == [1]


def test_copy_is_independent():
    gibbon = Gibbon.create(2).set_position(1)
    clone = gibbon.copy()
    clone.set_position(2)
    assert gibbon.get_positions_array() == [1]
    assert clone.get_positions_array() == [1, 2]


def test_str_and_repr():
    gibbon = Gibbon.create(2).set_position(1).set_position(16)
    assert str(gibbon) == "1000000000000001"
    assert repr(gibbon) == "Gibbon(byte_length=2, positions=[1, 16])"


@pytest.mark.parametrize("method", ["equals", "has_all_from_gibbon", "has_any_from_gibbon", "merge_with_gibbon"])
def test_cross_gibbon_operations_require_a_gibbon(method):
    gibbon = Gibbon.create(1)
    with pytest.raises(TypeError, match="Expected a Gibbon"):
        getattr(gibbon, method)(b"\x01")
    assert gibbon.to_bytes() == b"\x00"
