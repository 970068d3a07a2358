"""Central logging helpers"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import structlog
import structlog.stdlib

from collectd_wire.config import Settings, settings

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_MAX_LOG_BYTES = 5 * 1024 * 1024
_LOG_BACKUPS = 5


def _renderer(config: Settings):
    if config.log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def _handlers(component: str, config: Settings) -> List[logging.Handler]:
    # stderr only: stdout carries decoded JSON documents
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_to_file:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                config.log_dir / f"{component}.log",
                maxBytes=_MAX_LOG_BYTES,
                backupCount=_LOG_BACKUPS,
            )
        )
    formatter = logging.Formatter(_DEFAULT_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    component: str = "collectd_wire",
    level: Optional[str] = None,
    config: Settings = settings,
) -> None:
    """
    Configure structlog + stdlib logging for a component.

    Args:
        component: Names the rotating log file (``<log_dir>/<component>.log``)
        level: Level name overriding ``config.log_level``
        config: Settings supplying level, format, and file destination
    """
    level_name = (level or config.log_level).upper()
    logging.basicConfig(
        level=logging.getLevelName(level_name),
        handlers=_handlers(component, config),
        format=_DEFAULT_FORMAT,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(config),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger(__name__).info(
        "logging_initialized",
        extra={"component": component, "level": level_name, "format": config.log_format},
    )
