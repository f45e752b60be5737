# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Submission domain."""

from ag_client.domains.submission.models import GradingStatus, Submission, SubmissionObserver

__all__ = [
    "GradingStatus",
    "Submission",
    "SubmissionObserver",
]
