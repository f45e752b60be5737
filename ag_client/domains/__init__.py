# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Concrete entity types of the autograder API.

Each subpackage defines the entity models for one area of the API along
with their observer protocols and creation parameters.
"""
