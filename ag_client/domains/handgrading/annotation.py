# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reusable rubric annotations (named point deductions)."""

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from ag_client.core.sync import Deletable, Saveable
from ag_client.infrastructure.events import EventKinds

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class AnnotationObserver(Protocol):
    def on_annotation_created(self, annotation: "Annotation") -> None: ...

    def on_annotation_changed(self, annotation: "Annotation") -> None: ...

    def on_annotation_deleted(self, annotation: "Annotation") -> None: ...

    def on_annotation_order_changed(self, annotation_order: list[int]) -> None: ...


class NewAnnotationData(BaseModel):
    """Parameters accepted when creating an annotation."""

    short_description: str = ""
    long_description: str = ""
    deduction: float = 0
    max_deduction: float | None = None


class Annotation(Saveable, Deletable):
    """A deduction handgraders can apply to a line range."""

    EVENT_PREFIX = "annotation"
    DETAIL_PATH = "/annotations/{pk}/"
    EDITABLE_FIELDS = (
        "short_description",
        "long_description",
        "deduction",
        "max_deduction",
    )

    handgrading_rubric: int
    short_description: str = ""
    long_description: str = ""
    deduction: float = 0
    max_deduction: float | None = None

    @classmethod
    async def get_all_from_handgrading_rubric(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
    ) -> list["Annotation"]:
        return await cls._get_all(
            client, f"/handgrading_rubrics/{handgrading_rubric_pk}/annotations/"
        )

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", annotation_pk: int) -> "Annotation":
        return await cls._get(client, f"/annotations/{annotation_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
        data: NewAnnotationData,
    ) -> "Annotation":
        """Create an annotation and notify ``on_annotation_created``."""
        return await cls._create(
            client,
            f"/handgrading_rubrics/{handgrading_rubric_pk}/annotations/",
            data.model_dump(mode="json", exclude_unset=True),
        )

    @classmethod
    async def get_order(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
    ) -> list[int]:
        response = await client.http.get(
            f"/handgrading_rubrics/{handgrading_rubric_pk}/annotations/order/"
        )
        return list(response.data or [])

    @classmethod
    async def update_order(
        cls,
        client: "AutograderClient",
        handgrading_rubric_pk: int,
        annotation_pks: list[int],
    ) -> list[int]:
        """Reorder a rubric's annotations.

        Observers receive the new order via ``on_annotation_order_changed``.

        Returns:
            The order as stored by the server.
        """
        response = await client.http.put(
            f"/handgrading_rubrics/{handgrading_rubric_pk}/annotations/order/",
            list(annotation_pks),
        )
        order = list(response.data or [])
        cls.observers(client).notify(EventKinds.ORDER_CHANGED, order)
        return order
