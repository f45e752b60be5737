# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User domain."""

from ag_client.domains.user.models import User

__all__ = ["User"]
