"""Structured logging for transcript_export.

Log events go to stderr through structlog so that stdout stays free for
the CLI's export report. Output is a colored console rendering by default
or one JSON object per line.
"""

import logging
import sys
from typing import Any, TextIO

import structlog

from transcript_export.config import LoggingSettings

__all__ = [
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]

# Image and PDF backends log per glyph/tile at INFO and DEBUG
NOISY_LOGGERS = ("PIL", "xhtml2pdf", "reportlab", "fontTools")


def _processors(json_output: bool, add_timestamp: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(
    level: int = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Logging level (default: INFO)
        json_output: If True, one JSON object per event
        add_timestamp: If True, add ISO timestamp to log entries
        stream: Destination stream (default: stderr)
    """
    structlog.configure(
        processors=_processors(json_output, add_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=level,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_settings(settings: LoggingSettings) -> None:
    """Apply TRANSCRIPT_EXPORT_LOG_* settings; unknown level names mean INFO."""
    level = logging.getLevelName(settings.level.strip().upper())
    configure_logging(
        level=level if isinstance(level, int) else logging.INFO,
        json_output=settings.json_output,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually with the calling module's __name__."""
    return structlog.get_logger(name)


_configured = False


def _ensure_configured() -> None:
    global _configured
    if not _configured:
        configure_logging()
        _configured = True


_ensure_configured()
