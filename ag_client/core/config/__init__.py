# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the autograder client.

Example:
    >>> from ag_client.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from ag_client.core.config.settings import (
    APISettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "APISettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
