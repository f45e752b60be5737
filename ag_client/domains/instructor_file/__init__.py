# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor file domain."""

from ag_client.domains.instructor_file.models import InstructorFile, InstructorFileObserver

__all__ = [
    "InstructorFile",
    "InstructorFileObserver",
]
