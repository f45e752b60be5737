# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility helpers for the autograder client."""

from ag_client.utils.logging import entity_context, setup_logging

__all__ = [
    "entity_context",
    "setup_logging",
]
