# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Partial-update payloads built from per-type editable field lists."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel


def filter_editable(entity: BaseModel, fields: Iterable[str]) -> dict[str, Any]:
    """Select the editable fields of an entity for a PATCH payload.

    Only fields in ``fields`` are included, JSON-encoded, with the entity's
    current local values. A listed field that was never populated on the
    entity is omitted rather than sent as null.

    Args:
        entity: The entity to read values from.
        fields: Allow-list of field names.

    Returns:
        Payload dict.
    """
    return entity.model_dump(
        mode="json",
        include=set(fields),
        exclude_unset=True,
    )
