"""
Structured logging for bem.

structlog is routed through the standard library so that library users
only see output once they configure logging themselves. The CLI calls
``setup_logging`` to attach a stderr handler.

bem never calls ``structlog.configure``: its loggers carry their own
processor chain, leaving the global structlog configuration to the
host application.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from .config import settings


def _build_processors(json_output: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


# Shared by every bem logger; updated in place by setup_logging.
_processors: list[Processor] = _build_processors(settings.log_json)


def setup_logging(
    level: Optional[str] = None, json_output: Optional[bool] = None
) -> None:
    """Attach a stderr handler and choose how bem events are rendered.

    Args:
        level: Logging level name. Defaults to ``settings.log_level``.
        json_output: Render JSON lines instead of console output.
            Defaults to ``settings.log_json``.
    """
    level = (level or settings.log_level).upper()
    if json_output is None:
        json_output = settings.log_json

    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(message)s",
        force=True,
    )
    _processors[:] = _build_processors(json_output)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
