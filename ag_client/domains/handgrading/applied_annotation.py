# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Annotations applied to a location in a graded submission."""

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from ag_client.core.sync import Deletable
from ag_client.domains.handgrading.annotation import Annotation
from ag_client.domains.handgrading.location import Location

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class AppliedAnnotationObserver(Protocol):
    def on_applied_annotation_created(self, applied_annotation: "AppliedAnnotation") -> None: ...

    def on_applied_annotation_deleted(self, applied_annotation: "AppliedAnnotation") -> None: ...


class NewAppliedAnnotationData(BaseModel):
    """Parameters accepted when applying an annotation."""

    annotation: int
    location: Location


class AppliedAnnotation(Deletable):
    """One use of an annotation at a line range. Immutable once created."""

    EVENT_PREFIX = "applied_annotation"
    DETAIL_PATH = "/applied_annotations/{pk}/"

    location: Location
    annotation: Annotation
    handgrading_result: int

    @classmethod
    async def get_all_from_handgrading_result(
        cls,
        client: "AutograderClient",
        group_pk: int,
    ) -> list["AppliedAnnotation"]:
        return await cls._get_all(client, f"/groups/{group_pk}/applied_annotations/")

    @classmethod
    async def get_by_pk(
        cls,
        client: "AutograderClient",
        applied_annotation_pk: int,
    ) -> "AppliedAnnotation":
        return await cls._get(client, f"/applied_annotations/{applied_annotation_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        group_pk: int,
        data: NewAppliedAnnotationData,
    ) -> "AppliedAnnotation":
        """Apply an annotation and notify ``on_applied_annotation_created``."""
        payload = {
            "annotation": data.annotation,
            "location": data.location.model_dump(
                mode="json",
                include={"first_line", "last_line", "filename"},
            ),
        }
        return await cls._create(client, f"/groups/{group_pk}/applied_annotations/", payload)
