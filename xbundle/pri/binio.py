"""Little-endian binary reading and writing helpers for PRI streams."""

from __future__ import annotations

import struct
from typing import BinaryIO

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class PriFormatError(ValueError):
    """The data does not follow the PRI file format."""


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly size bytes, raising PriFormatError on a short read."""
    data = stream.read(size)
    if len(data) != size:
        raise PriFormatError(
            f"unexpected end of data: wanted {size} bytes, got {len(data)}"
        )
    return data


def read_u8(stream: BinaryIO) -> int:
    return read_exact(stream, 1)[0]


def read_u16(stream: BinaryIO) -> int:
    return _U16.unpack(read_exact(stream, 2))[0]


def read_u32(stream: BinaryIO) -> int:
    return _U32.unpack(read_exact(stream, 4))[0]


# Writers truncate to the field width, as the on-disk fields are fixed size.
def write_u8(stream: BinaryIO, value: int) -> None:
    stream.write(bytes((value & 0xFF,)))


def write_u16(stream: BinaryIO, value: int) -> None:
    stream.write(_U16.pack(value & 0xFFFF))


def write_u32(stream: BinaryIO, value: int) -> None:
    stream.write(_U32.pack(value & 0xFFFFFFFF))


def expect(condition: bool, message: str = "unexpected value in PRI data") -> None:
    """Raise PriFormatError with message unless condition holds."""
    if not condition:
        raise PriFormatError(message)