# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-criterion selections within a handgrading result.

Criterion results are created by the server (one per criterion of the
rubric, for every handgrading result), so there is no create operation
and no ``created`` event.
"""

from typing import TYPE_CHECKING, Protocol

from ag_client.core.sync import Deletable, Saveable
from ag_client.domains.handgrading.criterion import Criterion

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class CriterionResultObserver(Protocol):
    def on_criterion_result_changed(self, criterion_result: "CriterionResult") -> None: ...

    def on_criterion_result_deleted(self, criterion_result: "CriterionResult") -> None: ...


class CriterionResult(Saveable, Deletable):
    EVENT_PREFIX = "criterion_result"
    DETAIL_PATH = "/criterion_results/{pk}/"
    EDITABLE_FIELDS = ("selected",)

    selected: bool = False
    criterion: Criterion
    handgrading_result: int

    @classmethod
    async def get_all_from_handgrading_result(
        cls,
        client: "AutograderClient",
        handgrading_result_pk: int,
    ) -> list["CriterionResult"]:
        return await cls._get_all(
            client, f"/handgrading_results/{handgrading_result_pk}/criterion_results/"
        )

    @classmethod
    async def get_by_pk(
        cls,
        client: "AutograderClient",
        criterion_result_pk: int,
    ) -> "CriterionResult":
        return await cls._get(client, f"/criterion_results/{criterion_result_pk}/")
