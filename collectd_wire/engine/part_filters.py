"""
Part Filters

Typed accessors over a decoded part sequence. Results keep wire order.
"""
from typing import Iterable, List, Sequence, Type, TypeVar

from collectd_wire.models import (
    HighResNumberPart,
    NumberPart,
    Part,
    PartType,
    TextPart,
    ValueListPart,
)

P = TypeVar("P", TextPart, NumberPart, HighResNumberPart, ValueListPart)


def filter_parts(parts: Iterable[Part], type_code: int, part_class: Type[P]) -> List[P]:
    """
    Select parts carrying ``type_code`` that decoded to ``part_class``.

    Args:
        parts: Output of ``decode_packet``
        type_code: Part type code to match exactly
        part_class: Expected variant, e.g. ``TextPart``

    Returns:
        Matching parts in their original order

    Example:
        plugins = filter_parts(parts, PartType.PLUGIN, TextPart)
    """
    return [
        part for part in parts
        if part.header.type_code == type_code and isinstance(part, part_class)
    ]


def text_parts(parts: Iterable[Part], type_code: int) -> List[TextPart]:
    return filter_parts(parts, type_code, TextPart)


def texts(parts: Iterable[Part], type_code: int) -> List[str]:
    """Just the strings of the text parts with ``type_code``"""
    return [part.text for part in text_parts(parts, type_code)]


def number_parts(parts: Iterable[Part], type_code: int) -> List[NumberPart]:
    return filter_parts(parts, type_code, NumberPart)


def high_res_parts(parts: Iterable[Part], type_code: int) -> List[HighResNumberPart]:
    return filter_parts(parts, type_code, HighResNumberPart)


def value_lists(parts: Iterable[Part]) -> List[ValueListPart]:
    return filter_parts(parts, PartType.VALUES, ValueListPart)


def type_codes(parts: Sequence[Part]) -> List[int]:
    """Type codes in wire order, handy for checking part layout"""
    return [part.header.type_code for part in parts]
