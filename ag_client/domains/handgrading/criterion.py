# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rubric criteria (checkbox items worth points)."""

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from ag_client.core.sync import Deletable, Saveable
from ag_client.infrastructure.events import EventKinds

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class CriterionObserver(Protocol):
    def on_criterion_created(self, criterion: "Criterion") -> None: ...

    def on_criterion_changed(self, criterion: "Criterion") -> None: ...

    def on_criterion_deleted(self, criterion: "Criterion") -> None: ...

    def on_criterion_order_changed(self, criterion_order: list[int]) -> None: ...


class NewCriterionData(BaseModel):
    """Parameters accepted when creating a criterion."""

    short_description: str = ""
    long_description: str = ""
    points: float = 0


class Criterion(Saveable, Deletable):
    EVENT_PREFIX = "criterion"
    DETAIL_PATH = "/criteria/{pk}/"
    EDITABLE_FIELDS = (
        "short_description",
        "long_description",
        "points",
    )

    handgrading_rubric: int
    short_description: str = ""
    long_description: str = ""
    points: float = 0

    @classmethod
    async def get_all_from_handgrading_rubric(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
    ) -> list["Criterion"]:
        return await cls._get_all(
            client, f"/handgrading_rubrics/{handgrading_rubric_pk}/criteria/"
        )

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", criterion_pk: int) -> "Criterion":
        return await cls._get(client, f"/criteria/{criterion_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
        data: NewCriterionData,
    ) -> "Criterion":
        """Create a criterion and notify ``on_criterion_created``.

        The server also creates an unselected CriterionResult for every
        existing handgrading result of the rubric.
        """
        return await cls._create(
            client,
            f"/handgrading_rubrics/{handgrading_rubric_pk}/criteria/",
            data.model_dump(mode="json", exclude_unset=True),
        )

    @classmethod
    async def get_order(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
    ) -> list[int]:
        response = await client.http.get(
            f"/handgrading_rubrics/{handgrading_rubric_pk}/criteria/order/"
        )
        return list(response.data or [])

    @classmethod
    async def update_order(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
        criterion_pks: list[int],
    ) -> list[int]:
        """Reorder a rubric's criteria and notify ``on_criterion_order_changed``."""
        response = await client.http.put(
            f"/handgrading_rubrics/{handgrading_rubric_pk}/criteria/order/",
            list(criterion_pks),
        )
        order = list(response.data or [])
        cls.observers(client).notify(EventKinds.ORDER_CHANGED, order)
        return order
