"""
Packet Decoder - turns one collectd datagram into an ordered list of parts.

Loop: read a header, look the type code up in the registry, hand the part's
content to its decoder (or skip it when the code is unknown), repeat until
the buffer is exhausted.

Unknown type codes are skipped silently so newer senders stay readable.
Any malformed part aborts the whole packet: once a length is wrong the
remaining bytes cannot be trusted, so no partial result is returned.
"""
from typing import List, Optional

import structlog

from collectd_wire.config import settings
from collectd_wire.engine.cursor import BytesLike, Cursor
from collectd_wire.engine.part_decoders import decode_header
from collectd_wire.engine.registry import DEFAULT_REGISTRY, PartRegistry
from collectd_wire.exceptions import ConfigurationError, DecodeError, InvalidLengthError
from collectd_wire.models import Part

logger = structlog.get_logger()


class PacketDecoder:
    """
    Decode collectd network-plugin datagrams.

    Holds no per-packet state: every ``decode`` call builds its own cursor
    and result list, so one instance can be shared across threads.
    """

    def __init__(
        self,
        registry: PartRegistry = DEFAULT_REGISTRY,
        max_datagram_bytes: Optional[int] = None,
    ):
        """
        Args:
            registry: type code -> content decoder table
            max_datagram_bytes: reject larger buffers; defaults to settings
        """
        self.registry = registry
        self.max_datagram_bytes = (
            settings.max_datagram_bytes if max_datagram_bytes is None else max_datagram_bytes
        )
        if self.max_datagram_bytes <= 0:
            raise ConfigurationError(
                "max_datagram_bytes must be positive",
                {"max_datagram_bytes": self.max_datagram_bytes},
            )

    def decode(self, buffer: BytesLike) -> List[Part]:
        """
        Decode a full datagram.

        Args:
            buffer: Raw datagram bytes; read, never written or retained. Mutable
                buffers are copied first so a raised error never pins them

        Returns:
            Decoded parts in wire order (unknown type codes omitted)

        Raises:
            DecodeError: on the first malformed part, with ``details["offset"]``
                set to where that part starts
        """
        data = buffer if isinstance(buffer, bytes) else bytes(buffer)
        cursor = Cursor(data)
        total = cursor.remaining()

        parts: List[Part] = []
        offset = 0
        try:
            if total > self.max_datagram_bytes:
                raise InvalidLengthError(
                    f"Datagram of {total} bytes exceeds limit of {self.max_datagram_bytes}",
                    length=total,
                    reason="datagram_too_large",
                )
            while cursor.remaining():
                offset = cursor.position
                part = self._decode_part(cursor)
                if part is not None:
                    parts.append(part)
        except DecodeError as e:
            e.details["offset"] = offset
            logger.warning(
                "packet_decode_failed",
                error_type=type(e).__name__,
                error=e.message,
                offset=offset,
                parts_decoded=len(parts),
                buffer_size=total,
            )
            raise
        return parts

    def _decode_part(self, cursor: Cursor) -> Optional[Part]:
        header = decode_header(cursor)
        content = cursor.sub_cursor(header.content_length)

        decoder = self.registry.lookup(header.type_code)
        if decoder is None:
            logger.debug("part_skipped", type_code=header.type_code, length=header.length)
            return None

        part = decoder(header, content)
        if content.remaining():
            raise InvalidLengthError(
                f"Decoder left {content.remaining()} of {header.content_length} content bytes unread",
                type_code=header.type_code,
                length=header.length,
                reason="content_not_consumed",
            )
        return part


_default_decoder = PacketDecoder()


def decode_packet(buffer: BytesLike, registry: Optional[PartRegistry] = None) -> List[Part]:
    """Decode one datagram with the default registry, or ``registry`` when given"""
    if registry is None:
        return _default_decoder.decode(buffer)
    return PacketDecoder(registry).decode(buffer)
