# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Logging setup for applications embedding the client.

Client modules log through the standard ``logging`` module under the
``ag_client`` hierarchy. ``setup_logging`` attaches one structlog-rendered
handler to that hierarchy: colored console output in development, JSON
everywhere else. Entity operations run inside ``entity_context``, so every
record they emit (transport lines included) carries the entity type and
primary key.

Per-request transport lines (``ag_client.infrastructure.http``) are only
shown when ``settings.debug`` is set.

Example:
    >>> from ag_client.utils.logging import setup_logging
    >>> from ag_client.core.config import get_settings
    >>> setup_logging(get_settings())
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from ag_client.core.config.settings import Settings

PACKAGE_LOGGER = "ag_client"
TRANSPORT_LOGGER = "ag_client.infrastructure.http"

_HANDLER_NAME = "ag_client.structlog"


def setup_logging(settings: "Settings", stream: TextIO | None = None) -> logging.Handler:
    """Route the client's log records through structlog.

    Calling it again replaces the handler installed by the previous call.

    Args:
        settings: Client settings containing log_level and debug flag.
        stream: Output stream. Defaults to stdout.

    Returns:
        The handler attached to the ``ag_client`` logger.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_development or settings.debug:
        renderers: list[Processor] = [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *renderers,
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)

    logging.getLogger(TRANSPORT_LOGGER).setLevel(
        logging.DEBUG if settings.debug else max(log_level, logging.INFO)
    )
    # httpx logs every request at INFO; the transport logger covers that
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return handler


def entity_context(entity: Any) -> AbstractContextManager[None]:
    """Tag log records emitted inside the block with an entity's identity.

    Args:
        entity: Synced entity exposing EVENT_PREFIX and pk.

    Example:
        >>> with entity_context(course):
        ...     await client.http.patch(course.detail_path(), payload)
    """
    return structlog.contextvars.bound_contextvars(
        entity=entity.EVENT_PREFIX,
        pk=entity.pk,
    )
