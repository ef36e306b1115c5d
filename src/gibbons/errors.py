# coding=utf-8
# Copyright 2024 XiaHan
#
# Use of this source code is governed by an MIT-style
# license that can be found in the LICENSE file or at
# https://opensource.org/licenses/MIT.


class GibbonError(Exception):
    """
    Base class of every error raised by gibbons.
    """


class InvalidSizeError(GibbonError, ValueError):
    """
    A gibbon was requested with a byte size that is not a positive integer.
    """


class InvalidPositionError(GibbonError, ValueError):
    """
    A position is not a positive integer.
    """


class IllegalPositionError(GibbonError, IndexError):
    """
    A position lies beyond the bytes allocated by a gibbon.
    """


class IncomingTooBigError(GibbonError, ValueError):
    """
    The gibbon merged in is larger than the receiving gibbon.
    """


class UnsupportedEncodingError(GibbonError, TypeError):
    """
    Data handed to decode is neither text nor raw bytes.
    """


class RecordNotFoundError(GibbonError, LookupError):
    pass


class InvalidRecordError(GibbonError, ValueError):
    pass


def error_illegal_position(position: int, byte_length: int) -> IllegalPositionError:
    return IllegalPositionError(
        f"Illegal position {position}: gibbon holds {byte_length * 8} positions ({byte_length} bytes)"
    )


def error_record_not_found(collection: str, criteria) -> RecordNotFoundError:
    return RecordNotFoundError(f"{collection} not found: {criteria!r}")
