# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Free-text handgrader comments."""

from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from ag_client.core.sync import Deletable, Saveable
from ag_client.domains.handgrading.location import Location

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class CommentObserver(Protocol):
    def on_comment_created(self, comment: "Comment") -> None: ...

    def on_comment_changed(self, comment: "Comment") -> None: ...

    def on_comment_deleted(self, comment: "Comment") -> None: ...


class NewCommentData(BaseModel):
    """Parameters accepted when creating a comment.

    A comment without a location applies to the submission as a whole.
    """

    text: str
    location: Location | None = None


class Comment(Saveable, Deletable):
    EVENT_PREFIX = "comment"
    DETAIL_PATH = "/comments/{pk}/"
    EDITABLE_FIELDS = ("text",)

    location: Location | None = None
    text: str = ""
    handgrading_result: int

    @classmethod
    async def get_all_from_handgrading_result(
        cls,
        client: "AutograderClient",
        group_pk: int,
    ) -> list["Comment"]:
        return await cls._get_all(client, f"/groups/{group_pk}/comments/")

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", comment_pk: int) -> "Comment":
        return await cls._get(client, f"/comments/{comment_pk}/")

    @classmethod
    async def create(
        cls,
        client: "AutograderClient",
        group_pk: int,
        data: NewCommentData,
    ) -> "Comment":
        """Create a comment and notify ``on_comment_created``."""
        payload: dict = {"text": data.text}
        if data.location is not None:
            payload["location"] = data.location.model_dump(
                mode="json",
                include={"first_line", "last_line", "filename"},
            )
        return await cls._create(client, f"/groups/{group_pk}/comments/", payload)
