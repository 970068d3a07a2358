"""
Part Decoders - header and content decoding for collectd network parts.

Every part on the wire is a 4-byte header (type code, total length, both
big-endian) followed by ``length - 4`` content bytes. The content decoders
here each turn one part's content into a typed part:

- Text: null-terminated string (hostname, plugin, type, message, ...)
- Number: one big-endian signed 64-bit integer
- High-resolution number: a Number in 2^-30 second units, truncated to seconds
- Value list: a count followed by kind-tagged measurement values

Content decoders are handed a cursor confined to the part's content. The
packet decoder checks that they consumed all of it.
"""
from typing import Callable, Dict, List

from collectd_wire.engine.cursor import Cursor
from collectd_wire.exceptions import InvalidLengthError, ShortBufferError, UnknownValueKindError
from collectd_wire.models import (
    HEADER_SIZE,
    HIGH_RES_SHIFT,
    Absolute,
    Counter,
    Derive,
    Gauge,
    Header,
    HighResNumberPart,
    NumberPart,
    Part,
    TextPart,
    Value,
    ValueKind,
    ValueListPart,
)

NUMBER_SIZE = 8

ContentDecoder = Callable[[Header, Cursor], Part]


def decode_header(cursor: Cursor) -> Header:
    """
    Read a part header.

    Raises:
        ShortBufferError: fewer than 4 bytes remain
        InvalidLengthError: the declared length does not cover the header
    """
    type_code = cursor.read_u16_be()
    length = cursor.read_u16_be()
    if length < HEADER_SIZE:
        raise InvalidLengthError(
            f"Part length {length} is shorter than its {HEADER_SIZE}-byte header",
            type_code=type_code,
            length=length,
            reason="header_too_short",
        )
    return Header(type_code, length)


def decode_text(header: Header, cursor: Cursor) -> TextPart:
    """Decode a null-terminated string; the final byte is dropped unchecked"""
    size = header.content_length
    if size == 0:
        raise InvalidLengthError(
            "Text part has no content (missing terminator)",
            type_code=header.type_code,
            length=header.length,
            reason="empty_text",
        )
    raw = bytes(cursor.take(size)[:-1])
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        # Fallback to latin-1 which never fails
        text = raw.decode("latin-1")
    return TextPart(header, text)


def _read_number(header: Header, cursor: Cursor) -> int:
    if header.content_length != NUMBER_SIZE:
        raise InvalidLengthError(
            f"Numeric part must carry {NUMBER_SIZE} content bytes, got {header.content_length}",
            type_code=header.type_code,
            length=header.length,
            reason="numeric_width",
        )
    return cursor.read_i64_be()


def decode_number(header: Header, cursor: Cursor) -> NumberPart:
    return NumberPart(header, _read_number(header, cursor))


def decode_high_res_number(header: Header, cursor: Cursor) -> HighResNumberPart:
    """Decode a 2^-30 fixed-point time/interval; ``value`` is whole seconds (arithmetic shift)"""
    raw = _read_number(header, cursor)
    return HighResNumberPart(header, raw >> HIGH_RES_SHIFT, raw)


def _read_counter(cursor: Cursor) -> Value:
    return Counter(cursor.read_u32_be())


def _read_gauge(cursor: Cursor) -> Value:
    return Gauge(cursor.read_f64_le())


def _read_derive(cursor: Cursor) -> Value:
    # 4 bytes here; stock collectd writes 8 (see DESIGN.md)
    return Derive(cursor.read_i32_be())


def _read_absolute(cursor: Cursor) -> Value:
    return Absolute(cursor.read_i32_be())


VALUE_READERS: Dict[int, Callable[[Cursor], Value]] = {
    ValueKind.COUNTER: _read_counter,
    ValueKind.GAUGE: _read_gauge,
    ValueKind.DERIVE: _read_derive,
    ValueKind.ABSOLUTE: _read_absolute,
}


def decode_value_list(header: Header, cursor: Cursor) -> ValueListPart:
    """
    Decode a value list: ``count`` (u16 BE), then ``count`` x (kind byte, payload).

    Raises:
        UnknownValueKindError: a kind tag outside {0, 1, 2, 3}
        InvalidLengthError: the content runs out before every declared value
            is read, or bytes are left over afterwards
    """
    body = cursor.sub_cursor(header.content_length)

    values: List[Value] = []
    try:
        count = body.read_u16_be()
        for index in range(count):
            kind = body.read_u8()
            reader = VALUE_READERS.get(kind)
            if reader is None:
                raise UnknownValueKindError(kind=kind, index=index)
            values.append(reader(body))
    except ShortBufferError as e:
        raise InvalidLengthError(
            f"Value list content ends early: {e.message}",
            type_code=header.type_code,
            length=header.length,
            reason="value_list_underrun",
        ) from e

    if body.remaining():
        raise InvalidLengthError(
            f"Value list declares {count} values but leaves {body.remaining()} bytes unread",
            type_code=header.type_code,
            length=header.length,
            reason="value_list_overrun",
        )
    return ValueListPart(header, count, tuple(values))
