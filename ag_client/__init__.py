"""Autograder API client.

Python client-side representation layer for the autograder REST API:
server-owned entities (courses, projects, submissions, instructor files,
handgrading artifacts) mirrored as local objects that stay in sync through
create/get/save/refresh/delete round trips and broadcast lifecycle events
to registered observers.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

from ag_client.client import AutograderClient
from ag_client.core.exceptions import (
    AutograderError,
    NotFound,
    RemoteError,
    RemoteRejected,
    RemoteUnavailable,
)
from ag_client.core.sync.paging import Page

__version__ = "1.0.0"

__all__ = [
    "AutograderClient",
    "AutograderError",
    "NotFound",
    "Page",
    "RemoteError",
    "RemoteRejected",
    "RemoteUnavailable",
    "__version__",
]
