"""structlog setup for Pulse.

Events render through the colored console renderer on a terminal (or
when ``FORCE_COLOR`` is set) and as one JSON object per line otherwise.
Every event carries ``service="pulse-api"``.
"""

import logging
import os
import sys

import structlog

SERVICE_NAME = "pulse-api"

_TRUTHY = ("1", "true", "yes")


def _wants_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return True
    return sys.stdout.isatty()


def _add_service(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        debug: Let debug events through (e.g. skipped provisioning)
    """
    level = logging.DEBUG if debug else logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if _wants_color():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn and SQLAlchemy log through the standard library
    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s")
