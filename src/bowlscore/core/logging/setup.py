from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

import orjson
import structlog


def _json_serializer(obj: Any, default: Any) -> str:
    """
    JSON serializer for structured logs.

    Uses orjson for speed and deterministic output.
    """
    return orjson.dumps(obj, default=default).decode("utf-8")


def configure_logging(*, level: str = "INFO") -> None:
    """
    Configure structured logging for the entire application.

    Call once at process startup (the app factory does this).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        # Merge context variables (game_id, component, etc.)
        structlog.contextvars.merge_contextvars,

        # Standard metadata
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),

        # Exception handling
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.dict_tracebacks,

        # Final JSON output
        structlog.processors.JSONRenderer(serializer=_json_serializer),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    # Ensure stdlib logging flows through the same output
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def bind_context(**values: Mapping[str, Any]) -> None:
    """
    Bind contextual information to all future log entries in this context.

    Contextvars are per thread / per task: bind inside the request or game
    call, not at import or factory time.
    """
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    """
    Clear all bound logging context.
    """
    structlog.contextvars.clear_contextvars()


@contextmanager
def bound_context(**values: Any) -> Iterator[None]:
    """
    Bind values for the duration of a block, restoring the previous context after.

    Example:
        with bound_context(game_id=game.game_id):
            game.knock_down_pins(7)
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
