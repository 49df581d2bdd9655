"""Little-endian binary reading and writing of fixed-width values."""

from __future__ import annotations

import struct
from typing import BinaryIO, Union

Format = Union[str, int]


def _struct_format(fmt: str) -> str:
    return fmt if fmt[:1] in "<>!=@" else "<" + fmt


def _size(fmt: Format) -> int:
    if isinstance(fmt, int):
        if fmt < 1:
            raise ValueError(f"invalid value width: {fmt}")
        return fmt
    return struct.calcsize(_struct_format(fmt))


def _encode(value: int | float, fmt: Format) -> bytes:
    if isinstance(fmt, int):
        return int(value).to_bytes(_size(fmt), "little")
    return struct.pack(_struct_format(fmt), value)


def _decode(data: bytes, fmt: Format) -> int | float:
    if isinstance(fmt, int):
        return int.from_bytes(data, "little")
    return struct.unpack(_struct_format(fmt), data)[0]


class FileWriter:
    """Writes fixed-width values to a binary file.

    ``fmt`` is either a :mod:`struct` format code (little-endian unless a
    byte order is given) or an integer byte width for unsigned integers.
    """

    def __init__(self, filename: str) -> None:
        self._file: BinaryIO = open(filename, "wb")

    def write(self, value: int | float, fmt: Format = "Q") -> None:
        self._file.write(_encode(value, fmt))

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "FileWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FileReader:
    """Reads fixed-width values from a binary file."""

    def __init__(self, filename: str) -> None:
        self._file: BinaryIO = open(filename, "rb")

    def read(self, fmt: Format = "Q") -> int | float:
        size = _size(fmt)
        data = self._file.read(size)
        if len(data) < size:
            raise EOFError(f"expected {size} bytes, got {len(data)}")
        return _decode(data, fmt)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "FileReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()