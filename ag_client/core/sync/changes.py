# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Change detection between version markers."""

from typing import Any


def version_changed(before: Any, after: Any) -> bool:
    """Tell whether a server-side write happened between two fetches.

    Version markers are opaque tokens (``last_modified`` timestamps); only
    equality is meaningful, never ordering.
    """
    return before != after
