# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student submissions and their grading status."""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import Field

from ag_client.core.sync import Saveable
from ag_client.infrastructure.events import EventKinds

if TYPE_CHECKING:
    from ag_client.client import AutograderClient

logger = logging.getLogger(__name__)


class GradingStatus(str, Enum):
    # Accepted and saved, not yet queued
    received = "received"
    queued = "queued"
    being_graded = "being_graded"
    # Non-deferred test cases are done; the group may submit again
    waiting_for_deferred = "waiting_for_deferred"
    finished_grading = "finished_grading"
    # Withdrawn by a student before grading started
    removed_from_queue = "removed_from_queue"
    error = "error"


class SubmissionObserver(Protocol):
    def on_submission_created(self, submission: "Submission") -> None: ...

    def on_submission_changed(self, submission: "Submission") -> None: ...


class Submission(Saveable):
    """One set of files submitted by a group."""

    EVENT_PREFIX = "submission"
    DETAIL_PATH = "/submissions/{pk}/"
    EDITABLE_FIELDS = (
        "count_towards_daily_limit",
        "count_towards_total_limit",
    )

    group: int
    timestamp: str
    submitter: str

    submitted_filenames: list[str] = Field(default_factory=list)
    discarded_files: list[str] = Field(default_factory=list)
    missing_files: dict[str, int] = Field(default_factory=dict)

    status: GradingStatus = GradingStatus.received

    count_towards_daily_limit: bool = True
    is_past_daily_limit: bool = False
    is_bonus_submission: bool = False
    count_towards_total_limit: bool = True

    does_not_count_for: list[str] = Field(default_factory=list)

    position_in_queue: int = 0

    @classmethod
    async def get_all_from_group(
        cls,
        client: "AutograderClient",
        group_pk: int,
    ) -> list["Submission"]:
        return await cls._get_all(client, f"/groups/{group_pk}/submissions/")

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", submission_pk: int) -> "Submission":
        return await cls._get(client, f"/submissions/{submission_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        group_pk: int,
        files: Sequence[tuple[str, bytes]],
    ) -> "Submission":
        """Submit files for a group and notify ``on_submission_created``.

        Args:
            client: Client to submit through.
            group_pk: Submitting group.
            files: (filename, content) pairs.
        """
        uploads = [("submitted_files", name, content) for name, content in files]
        return await cls._create(client, f"/groups/{group_pk}/submissions/", files=uploads)

    async def get_file_content(self, filename: str) -> bytes:
        response = await self.client.http.get(
            f"/submissions/{self.pk}/file/",
            params={"filename": filename},
            raw=True,
        )
        return response.data

    async def remove_from_queue(self) -> None:
        """Withdraw this submission from the grading queue.

        The server's updated record is merged and ``on_submission_changed``
        fires unconditionally.
        """
        response = await self.client.http.post(f"/submissions/{self.pk}/remove_from_queue/")
        self.apply_snapshot(response.data)
        logger.info("Removed submission %s from queue", self.pk)
        self._notify(EventKinds.CHANGED, self)
