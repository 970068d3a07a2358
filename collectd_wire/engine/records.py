"""
Record Assembly - fold a decoded part sequence into metric records.

collectd only sends identifying fields (host, plugin, type, ...) when they
change, so each value list inherits whatever was most recently set earlier
in the same packet. This module tracks those fields in wire order and emits
one record per value list and one per notification message.

State never crosses packets: each call starts from empty identifiers.
"""
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

import structlog

from collectd_wire.exceptions import RecordAssemblyError
from collectd_wire.models import (
    HighResNumberPart,
    MetricRecord,
    NumberPart,
    Part,
    PartType,
    RecordKind,
    TextPart,
    ValueListPart,
)

logger = structlog.get_logger()

_TEXT_FIELDS = {
    PartType.HOST: "host",
    PartType.PLUGIN: "plugin",
    PartType.PLUGIN_INSTANCE: "plugin_instance",
    PartType.TYPE: "type",
    PartType.TYPE_INSTANCE: "type_instance",
}


@dataclass(frozen=True)
class _Identity:
    host: Optional[str] = None
    plugin: Optional[str] = None
    plugin_instance: Optional[str] = None
    type: Optional[str] = None
    type_instance: Optional[str] = None
    time: Optional[float] = None
    interval: Optional[float] = None
    severity: Optional[int] = None


def assemble_records(parts: Iterable[Part]) -> List[MetricRecord]:
    """
    Interpret decoded parts as collectd value lists and notifications.

    Args:
        parts: Output of ``decode_packet``, in wire order

    Returns:
        One MetricRecord per value list or message part, in wire order

    Raises:
        RecordAssemblyError: a value list arrives before host, plugin and type are known
    """
    identity = _Identity()
    records: List[MetricRecord] = []

    for part in parts:
        code = part.header.type_code

        if isinstance(part, TextPart) and code in _TEXT_FIELDS:
            identity = replace(identity, **{_TEXT_FIELDS[code]: part.text})

        elif isinstance(part, HighResNumberPart):
            if code == PartType.TIME_HR:
                identity = replace(identity, time=part.seconds)
            elif code == PartType.INTERVAL_HR:
                identity = replace(identity, interval=part.seconds)

        elif isinstance(part, NumberPart):
            if code == PartType.TIME:
                identity = replace(identity, time=float(part.value))
            elif code == PartType.INTERVAL:
                identity = replace(identity, interval=float(part.value))
            elif code == PartType.SEVERITY:
                identity = replace(identity, severity=part.value)

        elif isinstance(part, ValueListPart):
            missing = [name for name in ("host", "plugin", "type") if getattr(identity, name) is None]
            if missing:
                raise RecordAssemblyError(
                    f"Value list without {', '.join(missing)}",
                    {"missing": missing, "record_index": len(records)},
                )
            records.append(_record(identity, RecordKind.VALUES, values=part.values))

        elif isinstance(part, TextPart) and code == PartType.MESSAGE:
            records.append(_record(identity, RecordKind.NOTIFICATION, message=part.text))

    logger.debug("records_assembled", count=len(records))
    return records


def _record(identity: _Identity, kind: RecordKind, **fields) -> MetricRecord:
    return MetricRecord(
        kind=kind,
        host=identity.host,
        plugin=identity.plugin,
        plugin_instance=identity.plugin_instance,
        type=identity.type,
        type_instance=identity.type_instance,
        time=identity.time,
        interval=identity.interval,
        severity=identity.severity if kind == RecordKind.NOTIFICATION else None,
        **fields,
    )
