# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP transport for the autograder REST API."""

from ag_client.infrastructure.http.client import FileUpload, HttpClient, HttpResponse

__all__ = [
    "FileUpload",
    "HttpClient",
    "HttpResponse",
]
