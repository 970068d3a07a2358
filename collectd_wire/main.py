"""
collectd-wire-decode command line entry point

Decodes captured datagrams (one file per datagram) and prints them as JSON:
1. Reads each file
2. Decodes it with the default or legacy part registry
3. Optionally folds the parts into metric records
4. Writes one JSON document per file to stdout
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from collectd_wire.config import settings
from collectd_wire.engine.packet_decoder import PacketDecoder
from collectd_wire.engine.records import assemble_records
from collectd_wire.engine.registry import DEFAULT_REGISTRY, LEGACY_REGISTRY
from collectd_wire.exceptions import CollectdWireError
from collectd_wire.logging import setup_logging

logger = structlog.get_logger()


def decode_file(path: Path, decoder: PacketDecoder, records: bool = False) -> Dict[str, Any]:
    """Decode one datagram file into a JSON-ready document"""
    buffer = path.read_bytes()
    parts = decoder.decode(buffer)
    document: Dict[str, Any] = {"file": str(path), "size": len(buffer)}
    if records:
        document["records"] = [record.to_dict() for record in assemble_records(parts)]
    else:
        document["parts"] = [part.to_dict() for part in parts]
    logger.info("file_decoded", file=str(path), size=len(buffer), parts=len(parts))
    return document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode collectd network-plugin datagrams to JSON")
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Files holding one raw datagram each",
    )
    parser.add_argument(
        "--records",
        action="store_true",
        help="Print assembled metric records instead of raw parts",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        default=settings.decode_legacy_numbers,
        help="Also decode TIME, INTERVAL and SEVERITY parts",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging("decode", level=args.log_level)

    decoder = PacketDecoder(LEGACY_REGISTRY if args.legacy else DEFAULT_REGISTRY)
    status = 0
    for path in args.files:
        try:
            document = decode_file(path, decoder, records=args.records)
        except CollectdWireError as e:
            logger.error("file_decode_failed", file=str(path), error=e.message, **e.details)
            status = 1
            continue
        except OSError as e:
            logger.error("file_read_failed", file=str(path), error=str(e))
            status = 1
            continue
        json.dump(document, sys.stdout, indent=2)
        sys.stdout.write("\n")
    return status


if __name__ == "__main__":
    sys.exit(main())
