"""structlog rendering for vpacktime's own log records.

Codecs log through stdlib ``logging.getLogger(__name__)``. When enabled via
``CodecSettings.verbose`` / ``CodecSettings.log_json``, :func:`configure_logging`
attaches one stderr handler to the ``vpacktime`` logger whose records are
rendered by structlog's ProcessorFormatter:
- Human (default): console-rendered lines
- JSON (log_json): one JSON object per line

The root logger and the host application's handlers are never touched.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "vpacktime"
HANDLER_NAME = "vpacktime.structlog"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> logging.Handler:
    """Route ``vpacktime`` log records to stderr through structlog.

    Calling again replaces the handler installed by the previous call.

    Args:
        verbose: Emit DEBUG records (codec registration, legacy numeric
            decodes). When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.

    Returns:
        The installed handler.
    """
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
    return handler
