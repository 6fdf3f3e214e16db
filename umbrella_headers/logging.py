"""structlog wiring for the header formatter and its CLI."""

from __future__ import annotations

import logging
import sys

import structlog

from .config import get_settings

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
]


def _renderer(json: bool) -> structlog.types.Processor:
    if json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(*, json: bool | None = None, level: str | None = None) -> None:
    """Route structlog events through one stderr handler on the root logger.

    *json* and *level* default to ``HeaderSettings.log_json`` and
    ``HeaderSettings.log_level``.
    """
    settings = get_settings()
    json = settings.log_json if json is None else json
    level = (level or settings.log_level).upper()

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # setup_logging() may run more than once per process (CLI, tests)
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)  # stdout carries header output
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
