# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic synchronization layer shared by every entity type.

Components:
- Snapshot: Base model for server records, with composite construction
- SyncedEntity / Saveable / Deletable: create, get, save, refresh, delete
- filter_editable: Partial-update payloads from allow-lists
- version_changed: Version marker comparison
- Page: Counted, cursor-linked result pages
"""

from ag_client.core.sync.changes import version_changed
from ag_client.core.sync.composite import as_record, build_record, composite_fields
from ag_client.core.sync.entity import Deletable, Saveable, SyncedEntity
from ag_client.core.sync.fields import filter_editable
from ag_client.core.sync.paging import Page, fetch_page, fetch_page_from_token
from ag_client.core.sync.snapshot import Snapshot

__all__ = [
    "Deletable",
    "Page",
    "Saveable",
    "Snapshot",
    "SyncedEntity",
    "as_record",
    "build_record",
    "composite_fields",
    "fetch_page",
    "fetch_page_from_token",
    "filter_editable",
    "version_changed",
]
