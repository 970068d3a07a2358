"""
Byte builders for collectd test datagrams.

Tests assemble packets part by part with struct so every fixture states its
exact wire layout. Only tests use these; the package itself never encodes.
"""
import struct
from typing import Iterable, List, Tuple

from collectd_wire.models import PartType, ValueKind

_VALUE_FORMATS = {
    ValueKind.COUNTER: "!I",
    ValueKind.GAUGE: "<d",
    ValueKind.DERIVE: "!i",
    ValueKind.ABSOLUTE: "!i",
}

FIRST_TIME = 1419765641
SAMPLE_DISK_INSTANCES = ["sda1", "sda2", "sda5", "dm-0", "dm-1"]
SAMPLE_DISK_TYPES = ["disk_octets", "disk_ops", "disk_time", "disk_merged"]
SAMPLE_CPU_STATES = ["user", "nice", "system", "softirq", "steal", "idle"]


def header(type_code: int, length: int) -> bytes:
    return struct.pack("!HH", type_code, length)


def raw_part(type_code: int, content: bytes) -> bytes:
    return header(type_code, 4 + len(content)) + content


def text_part(type_code: int, text: str, terminator: bytes = b"\x00") -> bytes:
    return raw_part(type_code, text.encode("utf-8") + terminator)


def number_part(type_code: int, value: int) -> bytes:
    return raw_part(type_code, struct.pack("!q", value))


def high_res_part(type_code: int, seconds: int, fraction: int = 0) -> bytes:
    return number_part(type_code, (seconds << 30) | fraction)


def value_payload(kind: int, value) -> bytes:
    return struct.pack("!B", kind) + struct.pack(_VALUE_FORMATS[kind], value)


def value_list_part(values: Iterable[Tuple[int, object]], count: int = None) -> bytes:
    values = list(values)
    body = struct.pack("!H", len(values) if count is None else count)
    body += b"".join(value_payload(kind, value) for kind, value in values)
    return raw_part(PartType.VALUES, body)


def sample_datagram() -> bytes:
    """
    Disk and cpu readings from host "localhost".

    26 high-resolution timestamps (20 disk, 6 cpu), the first at
    1419765641 s, plus one part with an unassigned type code.
    """
    parts: List[bytes] = [
        text_part(PartType.HOST, "localhost"),
        high_res_part(PartType.INTERVAL_HR, 10),
        text_part(PartType.PLUGIN, "disk"),
    ]
    tick = 0
    for instance in SAMPLE_DISK_INSTANCES:
        parts.append(text_part(PartType.PLUGIN_INSTANCE, instance))
        for type_name in SAMPLE_DISK_TYPES:
            parts.append(high_res_part(PartType.TIME_HR, FIRST_TIME + tick // 10, 0x2A3B4C5))
            parts.append(text_part(PartType.TYPE, type_name))
            parts.append(value_list_part([(ValueKind.DERIVE, 1000 + tick), (ValueKind.DERIVE, 2000 + tick)]))
            tick += 1

    parts.append(raw_part(0x7F00, b"\x01\x02\x03\x04"))

    parts.append(text_part(PartType.PLUGIN, "cpu"))
    parts.append(text_part(PartType.PLUGIN_INSTANCE, "0"))
    parts.append(text_part(PartType.TYPE, "cpu"))
    for state in SAMPLE_CPU_STATES:
        parts.append(high_res_part(PartType.TIME_HR, FIRST_TIME + 2, 0x100))
        parts.append(text_part(PartType.TYPE_INSTANCE, state))
        parts.append(value_list_part([(ValueKind.DERIVE, tick)]))
        tick += 1
    return b"".join(parts)
