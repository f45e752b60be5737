# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Counted, cursor-linked result pages.

List endpoints that paginate answer with::

    {"count": 3, "next": "<url>|null", "previous": "<url>|null", "results": [...]}

A page is fetched either by page number and size or by feeding back one of
the opaque ``next``/``previous`` tokens of an earlier page. Nothing is
aggregated across pages.

Example:
    page = await fetch_page(client, "/projects/4/handgrading_results/", Summary)
    while page.next_token is not None:
        page = await fetch_page_from_token(client, page.next_token, Summary)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from ag_client.core.sync.entity import SyncedEntity

if TYPE_CHECKING:
    from ag_client.client import AutograderClient

T = TypeVar("T", bound=BaseModel)


@dataclass
class Page(Generic[T]):
    """One page of a paginated listing.

    Attributes:
        total_count: Number of records across all pages.
        next_token: Token for the following page, None on the last page.
        previous_token: Token for the preceding page, None on the first page.
        results: Records on this page, in server order.
    """

    total_count: int
    next_token: str | None = None
    previous_token: str | None = None
    results: list[T] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return self.next_token is not None

    @property
    def has_previous(self) -> bool:
        return self.previous_token is not None

    @classmethod
    def from_response(
        cls,
        data: Mapping[str, Any],
        item_type: type[T],
        client: "AutograderClient | None" = None,
    ) -> "Page[T]":
        """Build a page from a decoded list response.

        Args:
            data: Decoded ``{count, next, previous, results}`` body.
            item_type: Model class of each record.
            client: Client to bind synced entities to.
        """
        results = [item_type.model_validate(item) for item in data.get("results") or []]
        if client is not None:
            for item in results:
                if isinstance(item, SyncedEntity):
                    item.bind(client)

        return cls(
            total_count=data.get("count", len(results)),
            next_token=data.get("next") or None,
            previous_token=data.get("previous") or None,
            results=results,
        )


async def fetch_page(
    client: "AutograderClient",
    path: str,
    item_type: type[T],
    *,
    page_num: int = 1,
    page_size: int = 100,
    params: Mapping[str, Any] | None = None,
) -> Page[T]:
    """Fetch a page by number.

    Args:
        client: Client to issue the request through.
        path: Listing path.
        item_type: Model class of each record.
        page_num: 1-based page number.
        page_size: Records per page.
        params: Extra query parameters (filters).
    """
    query = dict(params or {})
    query["page"] = page_num
    query["page_size"] = page_size

    response = await client.http.get(path, params=query)
    return Page.from_response(response.data, item_type, client)


async def fetch_page_from_token(
    client: "AutograderClient",
    token: str,
    item_type: type[T],
) -> Page[T]:
    """Fetch the page a ``next``/``previous`` token points to."""
    response = await client.http.get(token)
    return Page.from_response(response.data, item_type, client)
