# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base model for server records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from ag_client.core.sync.composite import build_record


class Snapshot(BaseModel):
    """Field values of one server resource at a point in time.

    Construction accepts a mapping or any object exposing the model's
    fields, at every nesting level (see ``composite.build_record``).
    Unknown keys sent by the server are ignored. Existing instances are
    rebuilt on validation so a new record never shares children with them.
    """

    model_config = ConfigDict(extra="ignore", revalidate_instances="always")

    @model_validator(mode="before")
    @classmethod
    def _build_composite(cls, data: Any) -> dict[str, Any]:
        return build_record(cls, data)
