"""
Part Registry - immutable mapping from part type code to content decoder.

The registry is built once at import time and never mutated. The packet
decoder receives it by reference, so alternate registries (for example one
that also decodes the low-resolution numeric parts) can be swapped in
without touching shared state.
"""
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from collectd_wire.engine.part_decoders import (
    ContentDecoder,
    decode_high_res_number,
    decode_number,
    decode_text,
    decode_value_list,
)
from collectd_wire.models import PartType


class PartRegistry(Mapping):
    """Read-only ``type_code -> decoder`` table with exact-match lookup"""

    def __init__(self, decoders: Mapping[int, ContentDecoder]):
        self._decoders: Mapping[int, ContentDecoder] = MappingProxyType(
            {int(code): decoder for code, decoder in decoders.items()}
        )

    def __getitem__(self, type_code: int) -> ContentDecoder:
        return self._decoders[type_code]

    def __iter__(self) -> Iterator[int]:
        return iter(self._decoders)

    def __len__(self) -> int:
        return len(self._decoders)

    def lookup(self, type_code: int) -> Optional[ContentDecoder]:
        return self._decoders.get(type_code)

    def extended(self, decoders: Mapping[int, ContentDecoder]) -> "PartRegistry":
        """Return a new registry with ``decoders`` added; this one is left untouched"""
        merged: Dict[int, ContentDecoder] = dict(self._decoders)
        merged.update({int(code): decoder for code, decoder in decoders.items()})
        return PartRegistry(merged)

    def __repr__(self) -> str:
        codes = ", ".join(f"0x{code:04x}" for code in sorted(self._decoders))
        return f"PartRegistry({codes})"


DEFAULT_REGISTRY = PartRegistry({
    PartType.HOST: decode_text,
    PartType.PLUGIN: decode_text,
    PartType.PLUGIN_INSTANCE: decode_text,
    PartType.TYPE: decode_text,
    PartType.TYPE_INSTANCE: decode_text,
    PartType.VALUES: decode_value_list,
    PartType.TIME_HR: decode_high_res_number,
    PartType.INTERVAL_HR: decode_high_res_number,
    PartType.MESSAGE: decode_text,
})

# Pre-5.0 senders use second-resolution TIME/INTERVAL; SEVERITY tags notifications
LEGACY_REGISTRY = DEFAULT_REGISTRY.extended({
    PartType.TIME: decode_number,
    PartType.INTERVAL: decode_number,
    PartType.SEVERITY: decode_number,
})
