"""Structured logging for the onboarding workflows.

structlog renders JSON outside development and a colored console format in
development. Each workflow run binds a ``workflow_id`` (plus whatever keys the
caller passes) to the context, so every line written while registering or
linking one account can be grouped together.
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from onboard.core.config import Settings, get_settings


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the logger name; ``structlog.stdlib.add_logger_name`` needs stdlib loggers."""
    event_dict["logger"] = getattr(logger, "name", "onboard")
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _renderer(settings: Settings) -> Processor:
    if settings.is_development or settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Settings to read level and format from. Loaded from the
            environment when omitted.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)
    renderer = _renderer(settings)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            rename_message_field,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Cached loggers hold the stdout seen on first use.
        cache_logger_on_first_use=isinstance(renderer, structlog.processors.JSONRenderer),
    )

    # sqlalchemy and aiosmtplib log through the stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, named ``onboard`` unless told otherwise."""
    return structlog.get_logger(name or "onboard")


def new_workflow_id() -> str:
    return f"wf_{uuid.uuid4().hex[:12]}"


@contextmanager
def workflow_context(workflow: str, **fields: Any) -> Iterator[str]:
    """Bind a workflow id and extra fields for the duration of one workflow run.

    An id already bound by an outer run is reused, so a registration started
    from another workflow keeps a single id.

    Example:
        with workflow_context("link", provider_id="google") as workflow_id:
            logger.info("Identity linked")  # carries workflow_id and provider_id
    """
    bound = structlog.contextvars.get_contextvars()
    workflow_id = bound.get("workflow_id") or new_workflow_id()
    with structlog.contextvars.bound_contextvars(
        workflow=bound.get("workflow", workflow), workflow_id=workflow_id, **fields
    ):
        yield workflow_id
