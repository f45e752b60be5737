# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lifecycle event dispatch.

Components:
- ObserverRegistry: Ordered observer set for one entity type
- ObserverRegistries: Registry-per-type container owned by a client
- EventKinds: Event kind constants
"""

from ag_client.infrastructure.events.registry import ObserverRegistries, ObserverRegistry
from ag_client.infrastructure.events.types import EventKinds, handler_name

__all__ = [
    "EventKinds",
    "ObserverRegistries",
    "ObserverRegistry",
    "handler_name",
]
