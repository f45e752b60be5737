# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Synced entities: local objects mirroring one server resource each.

The base class owns the synchronization discipline shared by every entity
type:

- construction from server records, including nested children
- refresh: re-fetch by identity, notify ``changed`` only when the version
  marker moved
- save (Saveable): PATCH the allow-listed fields, merge the whole response,
  notify ``changed`` unconditionally
- delete (Deletable): DELETE by identity, notify ``deleted``

Server-derived fields are only ever replaced through ``apply_snapshot``;
direct attribute assignment is a local edit with no server effect until
``save``. Within one operation the merge happens before dispatch, and
dispatch happens before the caller gets control back. A failed request
leaves the entity untouched and fires nothing.

Example:
    course = await Course.get_by_pk(client, 12)
    course.subtitle = "Compilers"
    await course.save()     # observers have seen on_course_changed
"""

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import Field, PrivateAttr

from ag_client.core.sync.changes import version_changed
from ag_client.core.sync.composite import composite_fields
from ag_client.core.sync.fields import filter_editable
from ag_client.core.sync.snapshot import Snapshot
from ag_client.infrastructure.events import EventKinds, ObserverRegistry
from ag_client.infrastructure.http import FileUpload
from ag_client.utils.logging import entity_context

if TYPE_CHECKING:
    from ag_client.client import AutograderClient

logger = logging.getLogger(__name__)


class SyncedEntity(Snapshot):
    """Base class for entities synchronized with the autograder server.

    Subclasses set EVENT_PREFIX (observer method prefix) and DETAIL_PATH
    (a format string over the entity's fields, e.g. "/courses/{pk}/").

    Attributes:
        pk: Server-assigned identity. Set once at construction.
        last_modified: Server-assigned version marker.
    """

    EVENT_PREFIX: ClassVar[str] = ""
    DETAIL_PATH: ClassVar[str] = ""

    pk: int = Field(frozen=True)
    last_modified: str | None = None

    _client: Any = PrivateAttr(default=None)

    @property
    def client(self) -> "AutograderClient":
        """The client this entity was loaded through."""
        if self._client is None:
            raise RuntimeError(
                f"{type(self).__name__} pk={self.pk} is not bound to a client"
            )
        return self._client

    @property
    def version(self) -> str | None:
        """Server version marker, the record's ``last_modified`` stamp."""
        return self.last_modified

    def detail_path(self) -> str:
        """Path of this entity's resource."""
        return self.DETAIL_PATH.format(**dict(self))

    def bind(self, client: "AutograderClient") -> Self:
        """Attach this entity and its nested entities to a client."""
        self._client = client
        for child in self._children():
            child.bind(client)
        return self

    def _children(self) -> Iterator["SyncedEntity"]:
        for field in composite_fields(type(self)):
            value = getattr(self, field.name)
            items = value if field.many else [value]
            for item in items:
                if isinstance(item, SyncedEntity):
                    yield item

    def apply_snapshot(self, data: Any) -> None:
        """Replace every server-derived field from a server record.

        This is the only mutator of server-derived state. The record is
        fully validated before anything is assigned, so a malformed record
        leaves the entity untouched.

        Args:
            data: Server record for this same resource.

        Raises:
            pydantic.ValidationError: If the record is malformed.
            ValueError: If the record is for a different resource.
        """
        fresh = type(self).model_validate(data)
        if fresh.pk != self.pk:
            raise ValueError(
                f"Cannot apply {type(self).__name__} pk={fresh.pk} "
                f"onto pk={self.pk}"
            )

        for name in type(self).model_fields:
            if name == "pk":
                continue
            setattr(self, name, getattr(fresh, name))
        self.__pydantic_fields_set__ = set(fresh.model_fields_set) | {"pk"}

        if self._client is not None:
            self.bind(self._client)

    @classmethod
    def observers(cls, client: "AutograderClient") -> ObserverRegistry:
        """Get this entity type's observer registry on a client."""
        return client.observers(cls)

    @classmethod
    def subscribe(cls, client: "AutograderClient", observer: Any) -> None:
        cls.observers(client).subscribe(observer)

    @classmethod
    def unsubscribe(cls, client: "AutograderClient", observer: Any) -> None:
        cls.observers(client).unsubscribe(observer)

    def _notify(self, kind: str, *args: Any) -> None:
        self.observers(self.client).notify(kind, *args)

    @classmethod
    def from_response(cls, client: "AutograderClient", data: Any) -> Self:
        """Build an entity from a server record and bind it to ``client``."""
        return cls.model_validate(data).bind(client)

    @classmethod
    async def _create(
        cls,
        client: "AutograderClient",
        path: str,
        payload: Any = None,
        files: list[FileUpload] | None = None,
    ) -> Self:
        response = await client.http.post(path, payload, files=files)
        entity = cls.from_response(client, response.data)
        logger.info("Created %s: pk=%s", cls.EVENT_PREFIX, entity.pk)
        cls.observers(client).notify(EventKinds.CREATED, entity)
        return entity

    @classmethod
    async def _get(
        cls,
        client: "AutograderClient",
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Self:
        response = await client.http.get(path, params=params)
        return cls.from_response(client, response.data)

    @classmethod
    async def _get_all(
        cls,
        client: "AutograderClient",
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[Self]:
        response = await client.http.get(path, params=params)
        return [cls.from_response(client, item) for item in response.data or []]

    async def refresh(self) -> None:
        """Reload every field from the server.

        Observers are notified with ``changed`` only if the version marker
        differs from the one held before the fetch.
        """
        before = self.last_modified
        with entity_context(self):
            response = await self.client.http.get(self.detail_path())
        self.apply_snapshot(response.data)

        if version_changed(before, self.last_modified):
            self._notify(EventKinds.CHANGED, self)
        else:
            logger.debug("Refreshed %s pk=%s: unchanged", self.EVENT_PREFIX, self.pk)


class Saveable(SyncedEntity):
    """Entity whose allow-listed fields can be pushed as a partial update."""

    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ()

    def editable_payload(self) -> dict[str, Any]:
        """Current values of the allow-listed fields."""
        return filter_editable(self, self.EDITABLE_FIELDS)

    async def save(self) -> None:
        """Send the editable fields and merge the server's response.

        Observers are always notified with ``changed``, even when the
        returned version marker equals the previous one.
        """
        with entity_context(self):
            response = await self.client.http.patch(
                self.detail_path(),
                self.editable_payload(),
            )
        self.apply_snapshot(response.data)
        self._notify(EventKinds.CHANGED, self)


class Deletable(SyncedEntity):
    """Entity that can be deleted on the server.

    After a successful delete the local object keeps its last field values
    but must not be saved or refreshed again.
    """

    async def delete(self) -> None:
        with entity_context(self):
            await self.client.http.delete(self.detail_path())
            logger.info("Deleted %s: pk=%s", self.EVENT_PREFIX, self.pk)
        self._notify(EventKinds.DELETED, self)
