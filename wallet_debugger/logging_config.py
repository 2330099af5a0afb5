"""
Structured logging configuration using structlog.

Operational logs go to stderr as JSON, or as colored console lines at DEBUG.
The diagnostic log mirror (``wallet_debugger.console``) gets a handler of
its own: plain console lines at ``console_log_level``, so the wallet trace
stays readable and can be silenced without touching the rest.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings
from .telemetry.diagnostic_log import CONSOLE_LOGGER


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _handler(renderer: structlog.types.Processor, pre_chain: list) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def setup_logging(log_level: Optional[str] = None, console_level: Optional[str] = None) -> None:
    """Configure structlog and the diagnostic log mirror.

    Args:
        log_level: Override log level (default: from settings.log_level)
        console_level: Override mirror level (default: from settings.console_log_level)
    """
    level = _level(log_level or settings.log_level)
    is_dev = level == logging.DEBUG

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_handler(renderer, shared_processors))
    root.setLevel(level)

    # Mirror entries already carry their own timestamp
    mirror = logging.getLogger(CONSOLE_LOGGER)
    mirror.handlers.clear()
    mirror.addHandler(
        _handler(
            structlog.dev.ConsoleRenderer(colors=False),
            [structlog.stdlib.add_log_level],
        )
    )
    mirror.setLevel(_level(console_level or settings.console_log_level))
    mirror.propagate = False

    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
