"""Logging configuration and runner log grouping."""
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, TextIO

import structlog
from structlog.types import EventDict, Processor

IGNORED_LOGGERS = ["aiohttp", "asyncio"]


def add_timestamp(_, __, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to the event dict."""
    if "timestamp" not in event_dict:
        import datetime
        event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return event_dict


def unpack_event_dict(_, __, event_dict: EventDict) -> EventDict:
    """Flatten `logger.info({"event": ..., ...})` calls into the event dict."""
    event = event_dict.get("event")
    if isinstance(event, dict):
        payload = dict(event)
        event_dict["event"] = payload.pop("event", "")
        for key, value in payload.items():
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Everything goes to STDERR: STDOUT is reserved for runner workflow
    commands read by the runner.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
    )
    for name in IGNORED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        unpack_event_dict,
        structlog.stdlib.add_log_level,
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


@asynccontextmanager
async def measure(name: str, stream: TextIO = None) -> AsyncIterator[None]:
    """Fold a step into a collapsible runner log group and time it."""
    stream = stream or sys.stdout
    logger = get_logger(__name__)
    stream.write(f"::group::{name}\n")
    stream.flush()
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        logger.info({"event": "step_finished", "step": name, "seconds": round(duration, 2)})
        stream.write(f"Took {duration:6.2f} seconds\n")
        stream.write("::endgroup::\n")
        stream.flush()
