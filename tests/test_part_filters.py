from collectd_wire.engine.packet_decoder import decode_packet
from collectd_wire.engine.part_filters import (
    filter_parts,
    high_res_parts,
    number_parts,
    text_parts,
    texts,
    type_codes,
)
from collectd_wire.engine.registry import LEGACY_REGISTRY
from collectd_wire.models import HighResNumberPart, PartType, TextPart
from wire_builders import high_res_part, number_part, text_part


def test_filter_by_type_and_variant():
    parts = decode_packet(
        text_part(PartType.PLUGIN, "load")
        + text_part(PartType.TYPE, "load")
        + text_part(PartType.PLUGIN, "memory")
    )
    plugins = filter_parts(parts, PartType.PLUGIN, TextPart)
    assert [part.text for part in plugins] == ["load", "memory"]


def test_variant_mismatch_yields_nothing():
    parts = decode_packet(text_part(PartType.HOST, "h"))
    assert filter_parts(parts, PartType.HOST, HighResNumberPart) == []


def test_text_helpers():
    parts = decode_packet(text_part(PartType.TYPE_INSTANCE, "rx") + text_part(PartType.TYPE_INSTANCE, "tx"))
    assert len(text_parts(parts, PartType.TYPE_INSTANCE)) == 2
    assert texts(parts, PartType.TYPE_INSTANCE) == ["rx", "tx"]
    assert texts(parts, PartType.HOST) == []


def test_number_helpers():
    parts = decode_packet(
        number_part(PartType.INTERVAL, 10) + high_res_part(PartType.INTERVAL_HR, 20),
        registry=LEGACY_REGISTRY,
    )
    assert [part.value for part in number_parts(parts, PartType.INTERVAL)] == [10]
    assert [part.value for part in high_res_parts(parts, PartType.INTERVAL_HR)] == [20]
    assert type_codes(parts) == [PartType.INTERVAL, PartType.INTERVAL_HR]
