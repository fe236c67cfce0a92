"""
Centralized logging configuration for the Macrowatch engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import orjson
import structlog
from structlog.types import FilteringBoundLogger


def _orjson_dumps(event_dict: dict[str, Any], **kwargs: Any) -> str:
    return orjson.dumps(event_dict, **kwargs).decode()


def configure_logging(
    level: str = "INFO",
    format_json: Optional[bool] = None,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the service and its tools.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: JSON lines if True, console rendering if False; None picks
            console output for an interactive terminal and JSON otherwise
        include_timestamp: Include an ISO timestamp in each event
        include_caller: Include caller information (module, function, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())
    interactive = sys.stdout.isatty()
    if format_json is None:
        format_json = not interactive

    # structlog renders the whole line; stdlib only routes it
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.MODULE,
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    # Renderer must stay last
    if format_json:
        processors.append(structlog.processors.JSONRenderer(serializer=_orjson_dumps))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=interactive))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for signal derivation events.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the signals subsystem binding
    """
    return get_logger(name).bind(subsystem="signals")


def log_signal_derivation(
    logger: FilteringBoundLogger,
    signal: str,
    series: str,
    input_count: int,
    output_count: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a derived signal with standardized format.

    Args:
        logger: Structlog logger instance
        signal: Name of the derived signal (recession_windows, inversion_streak, ...)
        series: Identifier of the source series
        input_count: Number of points consumed
        output_count: Number of signal entries produced
        context: Additional context data
    """
    bound_logger = logger.bind(
        signal=signal,
        series=series,
        input_count=input_count,
        output_count=output_count,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Signal derived")
