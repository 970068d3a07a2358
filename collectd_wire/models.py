"""
Core data models

Decoded parts and values are frozen dataclasses: they are built once per
datagram and handed to the caller. Assembled records are pydantic models so
they validate and serialize like the rest of the ingestion-facing types.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, SkipValidation

HEADER_SIZE = 4
HIGH_RES_SHIFT = 30


class PartType(IntEnum):
    """Part type codes of the collectd network protocol"""

    HOST = 0x0000
    TIME = 0x0001
    PLUGIN = 0x0002
    PLUGIN_INSTANCE = 0x0003
    TYPE = 0x0004
    TYPE_INSTANCE = 0x0005
    VALUES = 0x0006
    INTERVAL = 0x0007
    TIME_HR = 0x0008
    INTERVAL_HR = 0x0009
    MESSAGE = 0x0100
    SEVERITY = 0x0101
    SIGN_SHA256 = 0x0200
    ENCR_AES256 = 0x0210


class ValueKind(IntEnum):
    """Data source kind tags inside a value list"""

    COUNTER = 0
    GAUGE = 1
    DERIVE = 2
    ABSOLUTE = 3


def _type_name(type_code: int) -> str:
    try:
        return PartType(type_code).name
    except ValueError:
        return f"0x{type_code:04x}"


@dataclass(frozen=True)
class Header:
    """Fixed 4-byte part header; length includes the header itself"""

    type_code: int
    length: int

    @property
    def content_length(self) -> int:
        return self.length - HEADER_SIZE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": _type_name(self.type_code), "type_code": self.type_code, "length": self.length}


# Values

@dataclass(frozen=True)
class Counter:
    value: int
    kind: ClassVar[ValueKind] = ValueKind.COUNTER

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.name.lower(), "value": self.value}


@dataclass(frozen=True)
class Gauge:
    value: float
    kind: ClassVar[ValueKind] = ValueKind.GAUGE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.name.lower(), "value": self.value}


@dataclass(frozen=True)
class Derive:
    value: int
    kind: ClassVar[ValueKind] = ValueKind.DERIVE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.name.lower(), "value": self.value}


@dataclass(frozen=True)
class Absolute:
    value: int
    kind: ClassVar[ValueKind] = ValueKind.ABSOLUTE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.name.lower(), "value": self.value}


Value = Union[Counter, Gauge, Derive, Absolute]


# Parts

@dataclass(frozen=True)
class TextPart:
    """Hostname, plugin, plugin instance, type, type instance or message"""

    header: Header
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {**self.header.to_dict(), "text": self.text}


@dataclass(frozen=True)
class NumberPart:
    """Plain 64-bit big-endian signed integer"""

    header: Header
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {**self.header.to_dict(), "value": self.value}


@dataclass(frozen=True)
class HighResNumberPart:
    """
    High-resolution time or interval.

    ``value`` is the raw fixed-point number shifted right by 30 bits, i.e.
    whole seconds (floor for negative inputs). ``raw`` keeps the undecoded
    integer so callers that need sub-second precision can use ``seconds``.
    """

    header: Header
    value: int
    raw: int

    @property
    def seconds(self) -> float:
        return self.raw / (1 << HIGH_RES_SHIFT)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.header.to_dict(), "value": self.value, "raw": self.raw}


@dataclass(frozen=True)
class ValueListPart:
    header: Header
    count: int
    values: Tuple[Value, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.header.to_dict(),
            "count": self.count,
            "values": [value.to_dict() for value in self.values],
        }


Part = Union[TextPart, NumberPart, HighResNumberPart, ValueListPart]


# Records

class RecordKind(str, Enum):
    """Kind of assembled record"""

    VALUES = "values"
    NOTIFICATION = "notification"


class MetricRecord(BaseModel):
    """One value list, or one notification, with the identifiers in effect when it arrived"""

    model_config = ConfigDict(frozen=True)

    kind: RecordKind = RecordKind.VALUES
    host: Optional[str] = None
    plugin: Optional[str] = None
    plugin_instance: Optional[str] = None
    type: Optional[str] = None
    type_instance: Optional[str] = None
    time: Optional[float] = None
    interval: Optional[float] = None
    values: SkipValidation[Tuple[Value, ...]] = ()
    message: Optional[str] = None
    severity: Optional[int] = None

    @property
    def source(self) -> str:
        """host/plugin[-instance]/type[-instance], as collectd names a value list"""
        plugin = self.plugin or ""
        if self.plugin_instance:
            plugin = f"{plugin}-{self.plugin_instance}"
        type_ = self.type or ""
        if self.type_instance:
            type_ = f"{type_}-{self.type_instance}"
        return "/".join([self.host or "", plugin, type_])

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"values"})
        data["source"] = self.source
        data["values"] = [value.to_dict() for value in self.values]
        return data
