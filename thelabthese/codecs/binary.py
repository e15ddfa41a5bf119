"""
Binary wire format for ``These`` values.

::

    byte 0: discriminant (0 = This, 1 = That, 2 = Both)
    0 -> <left payload>
    1 -> <right payload>
    2 -> <left payload> <right payload>

Payloads are written by :class:`BinaryCodec` instances supplied by the
caller, one per side.
"""

from typing import Any, Protocol
import logging
import struct

from thelabtyping.result import Err, Ok, Result

from ..errors import BinaryDecodeError
from ..these import Both, That, These, This

logger = logging.getLogger(__name__)

DISCRIMINANT_THIS = 0
DISCRIMINANT_THAT = 1
DISCRIMINANT_BOTH = 2


class BinaryCodec[T](Protocol):
    def write(self, value: T) -> bytes: ...

    def read(self, buf: bytes, offset: int) -> tuple[T, int]:
        """
        Read a value starting at ``offset``. Returns the value and the offset
        just past it. Raises :class:`BinaryDecodeError` on malformed input.
        """
        ...


def _take(buf: bytes, offset: int, size: int) -> bytes:
    end = offset + size
    if end > len(buf):
        raise BinaryDecodeError(
            f"unexpected end of input, wanted {size} bytes but only "
            f"{max(len(buf) - offset, 0)} remain",
            offset,
        )
    return buf[offset:end]


class StructCodec:
    """Fixed width values described by a :mod:`struct` format string."""

    def __init__(self, fmt: str) -> None:
        self._struct = struct.Struct(fmt)

    def write(self, value: Any) -> bytes:
        return self._struct.pack(value)

    def read(self, buf: bytes, offset: int) -> tuple[Any, int]:
        chunk = _take(buf, offset, self._struct.size)
        (value,) = self._struct.unpack(chunk)
        return value, offset + self._struct.size


def _write_varint(n: int) -> bytes:
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _read_varint(buf: bytes, offset: int) -> tuple[int, int]:
    result = 0
    shift = 0
    pos = offset
    while True:
        (byte,) = _take(buf, pos, 1)
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
        if shift > 63:
            raise BinaryDecodeError("varint length prefix too long", offset)


class BytesCodec:
    """Raw bytes behind a LEB128 length prefix."""

    def write(self, value: bytes) -> bytes:
        return _write_varint(len(value)) + bytes(value)

    def read(self, buf: bytes, offset: int) -> tuple[bytes, int]:
        length, pos = _read_varint(buf, offset)
        return bytes(_take(buf, pos, length)), pos + length


class UTF8Codec:
    """Text as UTF-8 behind a LEB128 length prefix."""

    _raw = BytesCodec()

    def write(self, value: str) -> bytes:
        return self._raw.write(value.encode("utf-8"))

    def read(self, buf: bytes, offset: int) -> tuple[str, int]:
        raw, pos = self._raw.read(buf, offset)
        try:
            return raw.decode("utf-8"), pos
        except UnicodeDecodeError as e:
            raise BinaryDecodeError(f"invalid UTF-8: {e.reason}", offset) from e


INT32 = StructCodec("<i")
INT64 = StructCodec("<q")
FLOAT64 = StructCodec("<d")
BYTES = BytesCodec()
UTF8 = UTF8Codec()


class TheseCodec[_LT, _RT]:
    """
    Codec for ``These[L, R]`` built from one codec per side. It is itself a
    :class:`BinaryCodec`, so nested ``These`` values compose.
    """

    def __init__(self, left: BinaryCodec[_LT], right: BinaryCodec[_RT]) -> None:
        self.left = left
        self.right = right

    def write(self, value: These[_LT, _RT]) -> bytes:
        match value:
            case This(left=a):
                return bytes([DISCRIMINANT_THIS]) + self.left.write(a)
            case That(right=b):
                return bytes([DISCRIMINANT_THAT]) + self.right.write(b)
            case Both(left=a, right=b):
                return (
                    bytes([DISCRIMINANT_BOTH])
                    + self.left.write(a)
                    + self.right.write(b)
                )
        raise TypeError(f"Expected a These value, got {value!r}")

    def read(self, buf: bytes, offset: int) -> tuple[These[_LT, _RT], int]:
        (discriminant,) = _take(buf, offset, 1)
        pos = offset + 1
        if discriminant == DISCRIMINANT_THIS:
            a, pos = self.left.read(buf, pos)
            return This(a), pos
        if discriminant == DISCRIMINANT_THAT:
            b, pos = self.right.read(buf, pos)
            return That(b), pos
        if discriminant == DISCRIMINANT_BOTH:
            a, pos = self.left.read(buf, pos)
            b, pos = self.right.read(buf, pos)
            return Both(a, b), pos
        raise BinaryDecodeError(f"invalid discriminant: {discriminant}", offset)


def encode[_LT, _RT](
    value: These[_LT, _RT],
    left: BinaryCodec[_LT],
    right: BinaryCodec[_RT],
) -> bytes:
    return TheseCodec(left, right).write(value)


def decode[_LT, _RT](
    data: bytes | bytearray | memoryview,
    left: BinaryCodec[_LT],
    right: BinaryCodec[_RT],
) -> Result[These[_LT, _RT], BinaryDecodeError]:
    """
    Decode exactly one ``These`` value from ``data``. Trailing bytes are an
    error.
    """
    buf = bytes(data)
    try:
        value, pos = TheseCodec(left, right).read(buf, 0)
        if pos != len(buf):
            raise BinaryDecodeError(
                f"{len(buf) - pos} unexpected trailing bytes",
                pos,
            )
    except BinaryDecodeError as e:
        logger.debug("Failed to decode These value: %s", e)
        return Err(e)
    return Ok(value)


__all__ = [
    "BinaryCodec",
    "StructCodec",
    "BytesCodec",
    "UTF8Codec",
    "TheseCodec",
    "INT32",
    "INT64",
    "FLOAT64",
    "BYTES",
    "UTF8",
    "encode",
    "decode",
]
