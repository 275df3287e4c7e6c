"""structlog setup: one JSON object per line on stderr."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

# Third-party loggers that report every HTTP request or migration step at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "alembic", "MARKDOWN")


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add upper-case log level to the event dictionary."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Route structlog through stdlib logging with JSON output.

    Safe to call more than once; the last call wins. stdout is left to
    command output.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)
    # basicConfig leaves the root level alone when handlers already exist (pytest)
    logging.getLogger().setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        # CJK titles stay readable in the log stream
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)
