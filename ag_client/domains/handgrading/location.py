# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Line ranges within submitted files."""

from ag_client.core.sync import Snapshot


class Location(Snapshot):
    """A line range in one submitted file.

    Server-built locations carry pk and last_modified; locations built
    locally for a create call do not.
    """

    pk: int | None = None
    first_line: int
    last_line: int
    filename: str
    last_modified: str | None = None
