# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor-uploaded project files.

Instructor files carry an opaque byte payload next to their metadata.
Renaming and replacing the content are dedicated operations with their
own event kinds (``renamed``, ``content_changed``); neither goes through
the generic ``changed`` event.
"""

import logging
from typing import TYPE_CHECKING, Protocol

from ag_client.core.sync import Deletable
from ag_client.infrastructure.events import EventKinds

if TYPE_CHECKING:
    from ag_client.client import AutograderClient

logger = logging.getLogger(__name__)


class InstructorFileObserver(Protocol):
    def on_instructor_file_created(self, file: "InstructorFile") -> None: ...

    def on_instructor_file_changed(self, file: "InstructorFile") -> None: ...

    def on_instructor_file_renamed(self, file: "InstructorFile") -> None: ...

    def on_instructor_file_content_changed(self, file: "InstructorFile") -> None: ...

    def on_instructor_file_deleted(self, file: "InstructorFile") -> None: ...


class InstructorFile(Deletable):
    """A file uploaded by course staff to a project."""

    EVENT_PREFIX = "instructor_file"
    DETAIL_PATH = "/instructor_files/{pk}/"

    project: int
    name: str
    size: int = 0

    @classmethod
    async def get_all_from_project(
        cls,
        client: "AutograderClient",
        project_pk: int,
    ) -> list["InstructorFile"]:
        return await cls._get_all(client, f"/projects/{project_pk}/instructor_files/")

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", file_pk: int) -> "InstructorFile":
        return await cls._get(client, f"/instructor_files/{file_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        project_pk: int,
        name: str,
        content: bytes,
    ) -> "InstructorFile":
        """Upload a new file and notify ``on_instructor_file_created``."""
        return await cls._create(
            client,
            f"/projects/{project_pk}/instructor_files/",
            files=[("file_obj", name, content)],
        )

    async def rename(self, new_name: str) -> None:
        """Rename the file and notify ``on_instructor_file_renamed``."""
        response = await self.client.http.put(
            f"/instructor_files/{self.pk}/name/",
            {"name": new_name},
        )
        self.apply_snapshot(response.data)
        logger.info("Renamed instructor file %s to %s", self.pk, self.name)
        self._notify(EventKinds.RENAMED, self)

    async def get_content(self) -> bytes:
        response = await self.client.http.get(
            f"/instructor_files/{self.pk}/content/", raw=True
        )
        return response.data

    async def set_content(self, content: bytes) -> None:
        """Replace the file's bytes and notify ``on_instructor_file_content_changed``."""
        response = await self.client.http.put(
            f"/instructor_files/{self.pk}/content/",
            files=[("file_obj", self.name, content)],
        )
        self.apply_snapshot(response.data)
        self._notify(EventKinds.CONTENT_CHANGED, self)
