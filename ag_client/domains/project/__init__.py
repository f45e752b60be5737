# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Project domain."""

from ag_client.domains.project.models import NewProjectData, Project, ProjectObserver

__all__ = [
    "NewProjectData",
    "Project",
    "ProjectObserver",
]
