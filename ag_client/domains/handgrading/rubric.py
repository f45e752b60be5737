# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Handgrading rubrics.

A rubric belongs to one project and owns its criteria and annotations,
embedded in server order.
"""

from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field

from ag_client.core.sync import Saveable
from ag_client.domains.handgrading.annotation import Annotation
from ag_client.domains.handgrading.criterion import Criterion

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class PointsStyle(str, Enum):
    start_at_zero_and_add = "start_at_zero_and_add"
    start_at_max_and_subtract = "start_at_max_and_subtract"


class HandgradingRubricObserver(Protocol):
    def on_handgrading_rubric_created(self, rubric: "HandgradingRubric") -> None: ...

    def on_handgrading_rubric_changed(self, rubric: "HandgradingRubric") -> None: ...


class NewHandgradingRubricData(BaseModel):
    """Parameters accepted when creating a rubric. All are optional."""

    points_style: PointsStyle | None = None
    max_points: float | None = None
    show_grades_and_rubric_to_students: bool | None = None
    handgraders_can_leave_comments: bool | None = None
    handgraders_can_adjust_points: bool | None = None
    show_only_applied_rubric_to_students: bool | None = None


class HandgradingRubric(Saveable):
    EVENT_PREFIX = "handgrading_rubric"
    DETAIL_PATH = "/handgrading_rubrics/{pk}/"
    EDITABLE_FIELDS = (
        "points_style",
        "max_points",
        "show_grades_and_rubric_to_students",
        "handgraders_can_leave_comments",
        "handgraders_can_adjust_points",
        "show_only_applied_rubric_to_students",
    )

    project: int
    points_style: PointsStyle = PointsStyle.start_at_zero_and_add
    max_points: float | None = None
    show_grades_and_rubric_to_students: bool = False
    handgraders_can_leave_comments: bool = False
    handgraders_can_adjust_points: bool = False
    show_only_applied_rubric_to_students: bool = False

    criteria: list[Criterion] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)

    @classmethod
    async def get_from_project(
        cls,
        client: "AutograderClient",
        project_pk: int,
    ) -> "HandgradingRubric":
        return await cls._get(client, f"/projects/{project_pk}/handgrading_rubric/")

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", rubric_pk: int) -> "HandgradingRubric":
        return await cls._get(client, f"/handgrading_rubrics/{rubric_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        project_pk: int,
        data: NewHandgradingRubricData | None = None,
    ) -> "HandgradingRubric":
        """Create a project's rubric and notify ``on_handgrading_rubric_created``."""
        payload = data.model_dump(mode="json", exclude_unset=True) if data else {}
        return await cls._create(
            client,
            f"/projects/{project_pk}/handgrading_rubric/",
            payload,
        )
