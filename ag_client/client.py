# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client context for the autograder API.

An AutograderClient owns the HTTP transport and one observer registry per
entity type. Every entity loaded through a client is bound to it, so later
save/refresh/delete calls go through the same transport and notify the
same observers. Two clients share nothing.

Example:
    async with AutograderClient.from_settings() as client:
        Course.subscribe(client, sidebar)
        course = await Course.create(client, NewCourseData(name="EECS 280"))
"""

import logging
from typing import Any

import httpx

from ag_client.core.config import Settings, get_settings
from ag_client.infrastructure.events import ObserverRegistries, ObserverRegistry
from ag_client.infrastructure.http import HttpClient

logger = logging.getLogger(__name__)


class AutograderClient:
    """Process-level context that entities are loaded through.

    Attributes:
        http: Transport used for every request.
    """

    def __init__(self, http: HttpClient) -> None:
        """Initialize the client.

        Args:
            http: Transport to issue requests through.
        """
        self.http = http
        self._registries = ObserverRegistries()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AutograderClient":
        """Build a client from configuration.

        Args:
            settings: Settings to use; defaults to get_settings().
            transport: Optional httpx transport (tests pass a MockTransport).

        Returns:
            A ready client.
        """
        settings = settings or get_settings()
        http = HttpClient(
            base_url=settings.api.base_url,
            headers=settings.api.auth_headers,
            timeout=settings.api.timeout,
            transport=transport,
        )
        logger.debug("Autograder client created for %s", settings.api.base_url)
        return cls(http)

    def observers(self, entity_type: type) -> ObserverRegistry:
        """Get the observer registry for an entity type."""
        return self._registries.for_type(entity_type)

    async def aclose(self) -> None:
        """Drop all observers and close the transport."""
        self._registries.clear()
        await self.http.aclose()

    async def __aenter__(self) -> "AutograderClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
