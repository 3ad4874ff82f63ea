"""
Structured logging for the tool gateways.

JSON lines by default, colored console output at DEBUG. Stdlib module loggers
(tool resolution, demo fallback, SDK and Splitwise calls) share the structlog
processor chain, so every line carries the request id and gateway bound by
``RequestLoggingMiddleware``. String values logged under credential-looking
keys are masked.
"""

import logging
import sys
from typing import Any, MutableMapping, Optional

import structlog

from .config import settings

_SECRET_MARKERS = ("key", "token", "secret", "private", "authorization", "password")
REDACTED = "[redacted]"

# Loggers that would duplicate the request middleware or flood demo traffic.
QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def redact_credentials(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor: mask string values whose key names a credential."""
    for name, value in event_dict.items():
        if isinstance(value, str) and any(marker in name.lower() for marker in _SECRET_MARKERS):
            event_dict[name] = REDACTED
    return event_dict


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure structlog and route stdlib logging through it.

    Safe to call more than once; each call replaces the root handler.

    Args:
        log_level: Override log level (default: from settings.log_level)
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    is_dev = level == logging.DEBUG

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_credentials,
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

    # Module loggers use %-style stdlib calls; foreign_pre_chain gives them
    # the same context and masking as structlog events
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
