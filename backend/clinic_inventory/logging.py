"""Logging configuration using structlog.

Colored console output for development, JSON lines for log aggregation
(LOG_JSON=true). Stdlib loggers are routed through the same processors.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from clinic_inventory.config import settings


def _renderer(json_output: bool) -> Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(json_output: bool | None = None, level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Both structlog loggers and stdlib loggers (uvicorn, sqlalchemy, ...) are
    rendered through the same ProcessorFormatter, so counter draws, ID
    collisions and request logs end up in one consistent stream.

    Args:
        json_output: Render JSON instead of colored console lines (default: settings.log_json)
        level: Root log level name (default: settings.log_level)

    Call this early in application startup (main.py and scripts).
    """
    if json_output is None:
        json_output = settings.log_json
    level = (level or settings.log_level).upper()

    # Shared by structlog and foreign (stdlib) log records
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso" if json_output else "%Y-%m-%d %H:%M:%S", utc=json_output),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    final_processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_output:
        # JSONRenderer cannot serialize exc_info tuples
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(_renderer(json_output))

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=final_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    logging.getLogger("asyncio").setLevel(logging.INFO)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    # echo=True would log every counter upsert at INFO
    for name in ("sqlalchemy.engine.Engine", "sqlalchemy.engine", "sqlalchemy.pool"):
        logging.getLogger(name).setLevel(logging.WARNING)


_configured = False


def setup_logging() -> None:
    """Setup logging once. Safe to call multiple times."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
