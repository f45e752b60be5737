# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Projects (assignments) within a course."""

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from ag_client.core.sync import Deletable, Saveable

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class ProjectObserver(Protocol):
    def on_project_created(self, project: "Project") -> None: ...

    def on_project_changed(self, project: "Project") -> None: ...

    def on_project_deleted(self, project: "Project") -> None: ...


class NewProjectData(BaseModel):
    """Parameters accepted when creating a project."""

    name: str
    visible_to_students: bool | None = None
    closing_time: str | None = None
    soft_closing_time: str | None = None
    disallow_student_submissions: bool | None = None
    disallow_group_registration: bool | None = None
    guests_can_submit: bool | None = None
    min_group_size: int | None = None
    max_group_size: int | None = None
    submission_limit_per_day: int | None = None
    allow_submissions_past_limit: bool | None = None
    total_submission_limit: int | None = None
    allow_late_days: bool | None = None


class Project(Saveable, Deletable):
    """A programming project students submit to."""

    EVENT_PREFIX = "project"
    DETAIL_PATH = "/projects/{pk}/"
    EDITABLE_FIELDS = (
        "name",
        "visible_to_students",
        "closing_time",
        "soft_closing_time",
        "disallow_student_submissions",
        "disallow_group_registration",
        "guests_can_submit",
        "min_group_size",
        "max_group_size",
        "submission_limit_per_day",
        "allow_submissions_past_limit",
        "total_submission_limit",
        "allow_late_days",
    )

    name: str
    course: int
    visible_to_students: bool = False
    closing_time: str | None = None
    soft_closing_time: str | None = None
    disallow_student_submissions: bool = False
    disallow_group_registration: bool = False
    guests_can_submit: bool = False
    min_group_size: int = 1
    max_group_size: int = 1
    submission_limit_per_day: int | None = None
    allow_submissions_past_limit: bool = True
    total_submission_limit: int | None = None
    allow_late_days: bool = False

    @classmethod
    async def get_all_from_course(
        cls,
        client: "AutograderClient",
        course_pk: int,
    ) -> list["Project"]:
        return await cls._get_all(client, f"/courses/{course_pk}/projects/")

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", project_pk: int) -> "Project":
        return await cls._get(client, f"/projects/{project_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        course_pk: int,
        data: NewProjectData,
    ) -> "Project":
        """Create a project in a course and notify ``on_project_created``."""
        return await cls._create(
            client,
            f"/courses/{course_pk}/projects/",
            data.model_dump(mode="json", exclude_unset=True),
        )
