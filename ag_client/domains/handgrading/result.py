# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Handgrading results: the graded aggregate for one group.

A handgrading result embeds its rubric and owns ordered lists of applied
annotations, comments and criterion results. Every fetch, save or refresh
rebuilds those children from the server record; children are never shared
between two results.

Results are addressed by the group they belong to
(``/groups/{group}/handgrading_result/``), and listed per project as
paginated summaries.
"""

import logging
from typing import TYPE_CHECKING, Protocol

from pydantic import Field

from ag_client.core.sync import Page, Saveable, Snapshot, fetch_page, fetch_page_from_token
from ag_client.domains.handgrading.applied_annotation import AppliedAnnotation
from ag_client.domains.handgrading.comment import Comment
from ag_client.domains.handgrading.criterion_result import CriterionResult
from ag_client.domains.handgrading.rubric import HandgradingRubric
from ag_client.infrastructure.events import EventKinds

if TYPE_CHECKING:
    from ag_client.client import AutograderClient

logger = logging.getLogger(__name__)


class HandgradingResultObserver(Protocol):
    def on_handgrading_result_created(self, handgrading_result: "HandgradingResult") -> None: ...

    def on_handgrading_result_changed(self, handgrading_result: "HandgradingResult") -> None: ...


class HandgradingResultStatus(Snapshot):
    """Grading progress shown in a group summary."""

    finished_grading: bool = False
    total_points: float = 0
    total_points_possible: float = 0


class GroupHandgradingResultSummary(Snapshot):
    """One group's row in a project's handgrading listing.

    ``handgrading_result`` is None for groups nobody has started grading.
    """

    pk: int
    project: int
    extended_due_date: str | None = None
    member_names: list[str] = Field(default_factory=list)
    bonus_submissions_remaining: int = 0
    late_days_used: int = 0
    num_submissions: int = 0
    num_submits_towards_limit: int = 0
    created_at: str | None = None
    handgrading_result: HandgradingResultStatus | None = None


class HandgradingResult(Saveable):
    EVENT_PREFIX = "handgrading_result"
    DETAIL_PATH = "/groups/{group}/handgrading_result/"
    EDITABLE_FIELDS = (
        "finished_grading",
        "points_adjustment",
    )

    submission: int
    group: int
    finished_grading: bool = False
    points_adjustment: float = 0
    submitted_filenames: list[str] = Field(default_factory=list)
    total_points: float = 0
    total_points_possible: float = 0

    handgrading_rubric: HandgradingRubric
    applied_annotations: list[AppliedAnnotation] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    criterion_results: list[CriterionResult] = Field(default_factory=list)

    @classmethod
    async def get_by_group_pk(
        cls,
        client: "AutograderClient",
        group_pk: int,
    ) -> "HandgradingResult":
        return await cls._get(client, f"/groups/{group_pk}/handgrading_result/")

    @classmethod
    async def get_or_create(
        cls,
        client: "AutograderClient",
        group_pk: int,
    ) -> "HandgradingResult":
        """Get a group's result, creating it on first access.

        ``on_handgrading_result_created`` fires only when the server
        actually created the result (201). An existing result (200) is
        returned without any event.
        """
        response = await client.http.post(f"/groups/{group_pk}/handgrading_result/", {})
        result = cls.from_response(client, response.data)

        if response.status == 201:
            logger.info("Created handgrading result for group %s", group_pk)
            cls.observers(client).notify(EventKinds.CREATED, result)

        return result

    @classmethod
    async def get_file_from_handgrading_result(
        cls,
        client: "AutograderClient",
        group_pk: int,
        filename: str,
    ) -> bytes:
        """Get the content of one file of the graded submission."""
        response = await client.http.get(
            f"/groups/{group_pk}/handgrading_result/",
            params={"filename": filename},
            raw=True,
        )
        return response.data

    @classmethod
    async def get_all_summaries_from_project(
        cls,
        client: "AutograderClient",
        project_pk: int,
        *,
        page_num: int = 1,
        page_size: int = 1000,
        include_staff: bool = True,
    ) -> Page[GroupHandgradingResultSummary]:
        """List per-group grading summaries for a project, one page at a time.

        Args:
            client: Client to issue the request through.
            project_pk: Project to list.
            page_num: 1-based page number.
            page_size: Groups per page.
            include_staff: Whether to include groups made up of staff.
        """
        return await fetch_page(
            client,
            f"/projects/{project_pk}/handgrading_results/",
            GroupHandgradingResultSummary,
            page_num=page_num,
            page_size=page_size,
            params={"include_staff": include_staff},
        )

    @classmethod
    async def get_summaries_page_from_token(
        cls,
        client: "AutograderClient",
        token: str,
    ) -> Page[GroupHandgradingResultSummary]:
        """Fetch the summary page a previous page's next/previous token names."""
        return await fetch_page_from_token(client, token, GroupHandgradingResultSummary)
