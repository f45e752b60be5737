# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lifecycle event kinds broadcast by entity types.

Observer methods are named ``on_<prefix>_<kind>``, where the prefix is the
entity type's ``EVENT_PREFIX``. For example a course observer implements
``on_course_created`` and ``on_course_changed``.

Adding a new kind:
1. Add a constant here
2. Dispatch it from the entity operation that causes it
3. Document the observer method on the entity's observer protocol
"""


class EventKinds:
    """All lifecycle event kinds."""

    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"
    RENAMED = "renamed"
    CONTENT_CHANGED = "content_changed"
    ORDER_CHANGED = "order_changed"


def handler_name(prefix: str, kind: str) -> str:
    """Build the observer method name for an event.

    Args:
        prefix: Entity type event prefix (e.g. "course").
        kind: Event kind (e.g. EventKinds.CHANGED).

    Returns:
        Method name such as "on_course_changed".
    """
    return f"on_{prefix}_{kind}"
