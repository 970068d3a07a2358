"""
Cursor - forward-only, bounds-checked reader over a byte buffer.

All wire reads go through a Cursor so that every fixed-width field is
checked against the bytes that remain before anything is unpacked.
"""
import struct
from typing import Union

from collectd_wire.exceptions import ShortBufferError

_U8 = struct.Struct("!B")
_U16_BE = struct.Struct("!H")
_U32_BE = struct.Struct("!I")
_I32_BE = struct.Struct("!i")
_I64_BE = struct.Struct("!q")
_F64_LE = struct.Struct("<d")

BytesLike = Union[bytes, bytearray, memoryview]


class Cursor:
    """
    Read position over an immutable view of a buffer.

    The cursor never writes to the buffer and never reads beyond it. After a
    failed read its position is unspecified; callers abort rather than retry.
    """

    __slots__ = ("_view", "_pos")

    def __init__(self, buffer: BytesLike):
        self._view = memoryview(buffer).toreadonly().cast("B")
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return len(self._view) - self._pos

    def take(self, n: int) -> memoryview:
        """Consume exactly ``n`` bytes and return a view over them"""
        if n < 0:
            raise ValueError(f"Cannot take a negative number of bytes: {n}")
        self._require(n)
        start = self._pos
        self._pos += n
        return self._view[start:self._pos]

    def sub_cursor(self, n: int) -> "Cursor":
        """Consume ``n`` bytes and return a new Cursor confined to them"""
        return Cursor(self.take(n))

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_u16_be(self) -> int:
        return self._unpack(_U16_BE)

    def read_u32_be(self) -> int:
        return self._unpack(_U32_BE)

    def read_i32_be(self) -> int:
        return self._unpack(_I32_BE)

    def read_i64_be(self) -> int:
        return self._unpack(_I64_BE)

    def read_f64_le(self) -> float:
        # the only little-endian field in the protocol (gauge values)
        return self._unpack(_F64_LE)

    def _require(self, n: int) -> None:
        remaining = self.remaining()
        if n > remaining:
            raise ShortBufferError(needed=n, remaining=remaining)

    def _unpack(self, fmt: struct.Struct):
        self._require(fmt.size)
        value = fmt.unpack_from(self._view, self._pos)[0]
        self._pos += fmt.size
        return value

    def __repr__(self) -> str:
        return f"Cursor(position={self._pos}, remaining={self.remaining()})"
