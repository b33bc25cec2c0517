"""Route folio's stdlib log records through structlog.

Library modules log with ``logging.getLogger(__name__)`` and %-style
messages. An embedding application calls :func:`configure_logging`
once; records are then rendered by structlog's ``ProcessorFormatter``
as either colored console lines or one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

FOLIO_LOGGER = "folio"

# Third-party loggers that are never louder than WARNING.
QUIET_LOGGERS = ("markdown_it",)

HANDLER_NAME = "folio-structlog"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _build_renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        # Non-ASCII titles stay unescaped.
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    isatty = getattr(stream, "isatty", None)
    return structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install folio's structlog handler on the root logger.

    A second call replaces the handler from the first one. Handlers
    installed by anything else are left in place.

    Args:
        verbose: DEBUG for ``folio.*`` loggers. When False, only WARNING+.
        log_json: Render JSON lines instead of console lines.
        stream: Output stream, stderr by default.

    Returns:
        The installed handler.
    """
    stream = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _build_renderer(log_json, stream),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(FOLIO_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
