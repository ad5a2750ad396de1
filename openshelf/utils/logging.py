"""Structured logging setup using structlog.

One shared processor chain (context vars, log level, timestamps, stack
info) feeds either a ConsoleRenderer or a JSONRenderer.  The caller picks
the renderer: the CLI passes ``json_output=True`` when
``Settings.app_env == "production"`` and the level from
``Settings.log_level``.

Standard-library ``logging`` is routed through the same formatter so
httpx output matches the rest of the stream.  httpx logs every request at
INFO, so it is held at WARNING unless DEBUG is requested.
"""

import logging
import sys
from typing import TextIO

import structlog

_NOISY_LIBRARIES = ("httpx", "httpcore")


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib bridge.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
        json_output: Render JSON lines instead of console output.
        stream: Output stream; stdout when omitted.  The CLI passes stderr so
                that results printed on stdout stay clean.

    Returns:
        A configured structlog BoundLogger.
    """
    level_name = log_level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level_name, level = "INFO", logging.INFO
    out = stream if stream is not None else sys.stdout

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # file=None lets each logger resolve sys.stdout when it is first used
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)

    library_level = logging.DEBUG if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
