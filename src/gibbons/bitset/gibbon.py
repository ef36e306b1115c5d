# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.

import struct
from typing import Dict, Iterable, List, Optional, Union

from gibbons.bitset.processor import (
    BITS_PER_BYTE,
    BitLocation,
    assign_bit,
    clear_bit,
    has_all_bits,
    has_any_bits,
    is_set,
    locate,
    set_bit,
    toggle_bit,
)
from gibbons.errors import (
    IncomingTooBigError,
    InvalidPositionError,
    InvalidSizeError,
    UnsupportedEncodingError,
    error_illegal_position,
)

BytesLike = Union[bytes, bytearray, memoryview]

MAX_CODE_UNIT = 0xFFFF


class Gibbon(object):
    """
    A fixed-length bitset where position N (starting from 1) stands for
    membership of group or permission N.

    The buffer is allocated once and never grows. Mutating methods return
    the gibbon itself so calls can be chained::

        gibbon = Gibbon.create(2).set_position(1).set_position(10)
        gibbon.get_positions_array()  # [1, 10]
    """

    def __init__(self, buffer: bytearray) -> None:
        if not isinstance(buffer, bytearray):
            raise TypeError(
                f"Expected a bytearray to back the gibbon, but received a: {type(buffer).__name__}"
            )
        if len(buffer) == 0:
            raise InvalidSizeError("A gibbon needs at least one byte")
        self._buffer = buffer

    @property
    def byte_length(self) -> int:
        return len(self._buffer)

    @staticmethod
    def create(byte_size: int) -> "Gibbon":
        """
        Creates a new empty gibbon.

        Args:
            byte_size (int): The number of bytes to allocate, the gibbon then holds byte_size * 8 positions.

        Raises:
            InvalidSizeError: If byte_size is not a positive integer.
        """
        if isinstance(byte_size, bool) or not isinstance(byte_size, int) or byte_size <= 0:
            raise InvalidSizeError(f"byte_size must be a positive integer, got {byte_size!r}")
        return Gibbon(bytearray(byte_size))

    def copy(self) -> "Gibbon":
        return Gibbon(bytearray(self._buffer))

    def _locate(self, position: int) -> BitLocation:
        location = locate(position)
        if location.byte_index >= len(self._buffer):
            raise error_illegal_position(position, len(self._buffer))
        return location

    def _resolve(self, positions: Optional[Iterable[int]]) -> Dict[BitLocation, bool]:
        # Every position is validated before the caller touches the buffer.
        # A later entry for the same magnitude overrides an earlier one.
        resolved: Dict[BitLocation, bool] = {}
        for position in positions or ():
            if isinstance(position, bool) or not isinstance(position, int):
                raise InvalidPositionError(f"Invalid position {position!r}: expected a signed integer")
            location = self._locate(abs(position))
            resolved.pop(location, None)
            resolved[location] = position > 0
        return resolved

    def _check_gibbon(self, gibbon: object) -> "Gibbon":
        if not isinstance(gibbon, Gibbon):
            raise TypeError(f"Expected a Gibbon, but received a: {type(gibbon).__name__}")
        return gibbon

    def _apply(self, location: BitLocation, on: bool) -> None:
        byte_index, bit_index = location
        self._buffer[byte_index] = assign_bit(self._buffer[byte_index], bit_index, on)

    def _scratch(self, resolved: Dict[BitLocation, bool], on: bool) -> "Gibbon":
        scratch = Gibbon.create(len(self._buffer))
        for location, state in resolved.items():
            if state == on:
                scratch._apply(location, True)
        return scratch

    def set_position(self, position: int) -> "Gibbon":
        """
        Sets the bit at position to 1.

        Raises:
            InvalidPositionError: If position is not a positive integer.
            IllegalPositionError: If position lies beyond the allocated bytes.
        """
        byte_index, bit_index = self._locate(position)
        self._buffer[byte_index] = set_bit(self._buffer[byte_index], bit_index)
        return self

    def clear_position(self, position: int) -> "Gibbon":
        byte_index, bit_index = self._locate(position)
        self._buffer[byte_index] = clear_bit(self._buffer[byte_index], bit_index)
        return self

    def toggle_position(self, position: int) -> "Gibbon":
        byte_index, bit_index = self._locate(position)
        self._buffer[byte_index] = toggle_bit(self._buffer[byte_index], bit_index)
        return self

    def change_position(self, position: int, on: bool = False) -> "Gibbon":
        self._apply(self._locate(position), on)
        return self

    def is_position(self, position: int) -> bool:
        """
        Checks whether the bit at position is 1.

        Raises:
            IllegalPositionError: If position lies beyond the allocated bytes.
        """
        byte_index, bit_index = self._locate(position)
        return is_set(self._buffer[byte_index], bit_index)

    def get_positions_array(self) -> List[int]:
        positions = []
        for byte_index, value in enumerate(self._buffer):
            if value == 0:
                continue
            for bit_index in range(BITS_PER_BYTE):
                if is_set(value, bit_index):
                    positions.append(byte_index * BITS_PER_BYTE + bit_index + 1)
        return positions

    def set_all_from_positions(self, positions: Optional[Iterable[int]] = None) -> "Gibbon":
        """
        Changes bits according to signed positions.

        A positive position sets the bit to 1, a negative position sets the
        bit at its absolute value to 0. Duplicates collapse and, for the same
        magnitude, the later entry wins: ``[1, -1]`` leaves position 1 clear.

        All positions are validated first, so a failing call leaves the
        gibbon untouched.

        Args:
            positions (Iterable[int]): Signed positions, none of them 0.

        Returns:
            Gibbon: self

        Raises:
            InvalidPositionError: If a position is 0 or not an integer.
            IllegalPositionError: If an absolute position lies beyond the allocated bytes.
        """
        for location, on in self._resolve(positions).items():
            self._apply(location, on)
        return self

    def unset_all_from_positions(self, positions: Optional[Iterable[int]] = None) -> "Gibbon":
        """
        The opposite of set_all_from_positions: positive positions are cleared
        and negative positions are set.
        """
        inverted = []
        for position in positions or ():
            if isinstance(position, bool) or not isinstance(position, int):
                raise InvalidPositionError(f"Invalid position {position!r}: expected a signed integer")
            inverted.append(-position)
        return self.set_all_from_positions(inverted)

    def has_all_from_positions(self, positions: Optional[Iterable[int]] = None) -> bool:
        """
        True when every positive position is set and every negative position is clear.

        Positions outside the gibbon raise IllegalPositionError instead of
        answering False.
        """
        resolved = self._resolve(positions)
        wanted_on = self._scratch(resolved, True)
        wanted_off = self._scratch(resolved, False)
        return self.has_all_from_gibbon(wanted_on) and not self.has_any_from_gibbon(wanted_off)

    def has_any_from_positions(self, positions: Optional[Iterable[int]] = None) -> bool:
        """
        True when some positive position is set or some negative position is clear.

        Positions outside the gibbon raise IllegalPositionError instead of
        answering False.
        """
        resolved = self._resolve(positions)
        wanted_on = self._scratch(resolved, True)
        if self.has_any_from_gibbon(wanted_on):
            return True
        wanted_off = self._scratch(resolved, False)
        return not self.has_all_from_gibbon(wanted_off)

    def equals(self, gibbon: "Gibbon") -> bool:
        """
        Compares contents, bytes beyond the shorter gibbon count as 0.
        """
        self._check_gibbon(gibbon)
        if self is gibbon or self._buffer is gibbon._buffer:
            return True
        this_buffer = self._buffer
        other_buffer = gibbon._buffer
        for i in range(max(len(this_buffer), len(other_buffer))):
            value1 = this_buffer[i] if i < len(this_buffer) else 0x0
            value2 = other_buffer[i] if i < len(other_buffer) else 0x0
            if value1 != value2:
                return False
        return True

    def has_all_from_gibbon(self, gibbon: "Gibbon") -> bool:
        """
        Checks that every bit set in the given gibbon is set in this one.

        Only the shared prefix (the shorter of both lengths) is compared, bits
        in the tail of a longer given gibbon are ignored.
        """
        self._check_gibbon(gibbon)
        for byte1, byte2 in zip(self._buffer, gibbon._buffer):
            if not has_all_bits(byte1, byte2):
                return False
        return True

    def has_any_from_gibbon(self, gibbon: "Gibbon") -> bool:
        self._check_gibbon(gibbon)
        for byte1, byte2 in zip(self._buffer, gibbon._buffer):
            if has_any_bits(byte1, byte2):
                return True
        return False

    def merge_with_gibbon(self, gibbon: "Gibbon") -> "Gibbon":
        """
        ORs the bits of the given gibbon into this one.

        Raises:
            IncomingTooBigError: If the given gibbon has more bytes than this one.
        """
        incoming = self._check_gibbon(gibbon)._buffer
        if len(incoming) > len(self._buffer):
            raise IncomingTooBigError(
                f"Incoming gibbon is too big: {len(incoming)} bytes into {len(self._buffer)} bytes"
            )
        for i, value in enumerate(incoming):
            self._buffer[i] |= value
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    @staticmethod
    def from_bytes(data: BytesLike) -> "Gibbon":
        return Gibbon(bytearray(data))

    def to_text(self) -> str:
        """
        Packs every two bytes into one 16 bit (little endian) character.

        The result is not meant to be read, it lets a gibbon live in a plain
        string field. An odd trailing byte is padded with zero.
        """
        data = bytes(self._buffer)
        if len(data) % 2:
            data += b"\x00"
        units = struct.unpack(f"<{len(data) // 2}H", data)
        return "".join(map(chr, units))

    @staticmethod
    def from_text(text: str) -> "Gibbon":
        """
        Restores a gibbon from to_text output, two bytes per character.

        Raises:
            UnsupportedEncodingError: If a character does not fit in 16 bits.
            InvalidSizeError: If text is empty.
        """
        units = [ord(char) for char in text]
        for unit in units:
            if unit > MAX_CODE_UNIT:
                raise UnsupportedEncodingError(
                    f"Character U+{unit:X} does not fit in a 16 bit code unit"
                )
        return Gibbon(bytearray(struct.pack(f"<{len(units)}H", *units)))

    def encode(self, encode_as_text: bool = False) -> Union[str, bytes]:
        if encode_as_text:
            return self.to_text()
        return self.to_bytes()

    @staticmethod
    def decode(data: Union[str, BytesLike]) -> "Gibbon":
        """
        Creates a gibbon from either encoding produced by encode.

        Raises:
            UnsupportedEncodingError: If data is neither a str nor bytes-like.
        """
        if isinstance(data, str):
            return Gibbon.from_text(data)
        if isinstance(data, (bytes, bytearray, memoryview)):
            return Gibbon.from_bytes(data)
        raise UnsupportedEncodingError(
            f"Expected a str or bytes for decoding, but received a: {type(data).__name__}"
        )

    def __len__(self) -> int:
        return len(self._buffer)

    def __contains__(self, position: object) -> bool:
        if isinstance(position, bool) or not isinstance(position, int) or position <= 0:
            return False
        byte_index, bit_index = locate(position)
        if byte_index >= len(self._buffer):
            return False
        return is_set(self._buffer[byte_index], bit_index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gibbon):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Gibbon(byte_length={len(self._buffer)}, positions={self.get_positions_array()})"

    def __str__(self) -> str:
        """
        Bits of every byte, position 1 first.
        """
        return "".join(bin(byte)[2:].zfill(8)[::-1] for byte in self._buffer)
