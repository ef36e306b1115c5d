# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

from typing import NamedTuple

from gibbons.errors import InvalidPositionError

BITS_PER_BYTE = 8
BYTE_MASK = 0xFF


class BitLocation(NamedTuple):
    byte_index: int
    bit_index: int


def locate(position: int) -> BitLocation:
    """
    Transforms a position (1..n) into a byte index and the bit index inside that byte.

    Args:
        position (int): The 1-based position, position 1 is the least significant bit of byte 0.

    Returns:
        BitLocation: e.g. ``locate(1) == (0, 0)`` and ``locate(256) == (31, 7)``.

    Raises:
        InvalidPositionError: If the position is not an integer greater than 0.
    """
    if isinstance(position, bool) or not isinstance(position, int) or position <= 0:
        raise InvalidPositionError(f"Invalid position {position!r}: expected a positive integer")
    index = position - 1
    return BitLocation(index // BITS_PER_BYTE, index % BITS_PER_BYTE)


def is_set(value: int, bit_index: int) -> bool:
    """
    Checks if the bit at bit_index is 1.

    0000 1101 value, bit_index 2
    0000 0011 value >> bit_index
    0000 0001 & 1 -> True
    """
    return ((value >> bit_index) & 0x1) == 0x1


def is_clear(value: int, bit_index: int) -> bool:
    return not is_set(value, bit_index)


def set_bit(value: int, bit_index: int) -> int:
    mask = 1 << bit_index
    return (value | mask) & BYTE_MASK


def clear_bit(value: int, bit_index: int) -> int:
    mask = 1 << bit_index
    return (value & ~mask) & BYTE_MASK


def toggle_bit(value: int, bit_index: int) -> int:
    mask = 1 << bit_index
    return (value ^ mask) & BYTE_MASK


def assign_bit(value: int, bit_index: int, desired: bool) -> int:
    """
    Sets or clears the bit at bit_index without branching on desired.

    0000 0001 value, bit_index 0, desired False
    1111 1110 ~mask
    ---------------- AND
    0000 0000 x1
    0000 0000 -state
    0000 0001 mask
    ---------------- AND
    0000 0000 x2
    ---------------- x1 OR x2
    0000 0000 result

    Args:
        value (int): Unsigned 8 bit value.
        bit_index (int): Bit to change (0..7).
        desired (bool): The new state of the bit.

    Returns:
        int: The changed value.
    """
    mask = 1 << bit_index
    state = 0x1 if desired else 0x0
    return ((value & ~mask) | (-state & mask)) & BYTE_MASK


def has_any_bits(byte1: int, byte2: int) -> bool:
    """
    Matches when byte1 shares any set bit with byte2.

    1000 1001 byte1
    0000 1000 byte2
    ---------- AND
    0000 1000 != 0 -> True
    """
    return (byte1 & byte2) != 0x0


def has_all_bits(byte1: int, byte2: int) -> bool:
    """
    Matches when every set bit of byte2 is also set in byte1.

    0101 0010 byte1
    0100 0010 byte2
    ---------- AND
    0100 0010 == byte2 -> True
    """
    return (byte1 & byte2) == byte2
