"""
Structured logging configuration for polycsg.

Uses structlog (https://www.structlog.org/) to provide structured, context-rich
logging. Events render as colored console lines on a terminal and as JSON
lines when stderr is piped, so batch runs can be parsed without a flag.

Usage::

    from polycsg.core.logging import configure_logging, get_logger

    configure_logging(level="INFO")  # Call once at startup
    logger = get_logger(__name__)
    logger.info("boolean_complete", operation="union", pieces=1)
"""

import logging
import sys
from typing import Any, ContextManager, Optional

import structlog


def _stream_is_terminal(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(
    level: str = "WARNING",
    json_output: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for polycsg and everything it calls.

    Boolean runs are quiet by default: only warnings and errors reach stderr
    unless ``level`` is lowered. The CLI calls this once per invocation.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: True for JSON lines, False for colored console lines.
            None picks console output when stderr is a terminal and JSON
            when it is piped or captured.
        log_file: Optional path that also receives every event. The file
            always gets JSON lines whatever the stderr renderer is.

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level {level!r}")

    if json_output is None:
        json_output = not _stream_is_terminal(sys.stderr)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )
    console_formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(),
        ],
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(json_formatter if json_output else console_formatter)
    handlers: list[logging.Handler] = [stderr_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(json_formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger for the given module name.

    Args:
        name: Module name, typically ``__name__``.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)


def operation_context(**fields: Any) -> ContextManager[None]:
    """
    Bind context fields to every log event emitted inside a ``with`` block.

    The fields land in the event dict via ``merge_contextvars``, so nested
    calls (welding, component separation) report which boolean run they
    belong to without threading the values through every signature.

    Example::

        with operation_context(operation="union", run_id=run_id):
            result = boolean_operation(a, b, "union")
    """
    return structlog.contextvars.bound_contextvars(**fields)
