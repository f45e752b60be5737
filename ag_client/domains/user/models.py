# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Autograder user accounts (read-only)."""

from typing import TYPE_CHECKING

from ag_client.core.sync import Snapshot

if TYPE_CHECKING:
    from ag_client.client import AutograderClient


class User(Snapshot):
    """A user account as reported by the server."""

    pk: int
    username: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    is_superuser: bool = False

    @classmethod
    async def get_current(cls, client: "AutograderClient") -> "User":
        """Get the user the client is authenticated as."""
        response = await client.http.get("/users/current/")
        return cls.model_validate(response.data)

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", user_pk: int) -> "User":
        response = await client.http.get(f"/users/{user_pk}/")
        return cls.model_validate(response.data)
