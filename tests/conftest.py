# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all tests:
- An in-process fake autograder server on httpx.MockTransport
- An AutograderClient wired to that server
- An observer that records every event it receives
- Builders for server records of each entity type
"""

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from ag_client.client import AutograderClient
from ag_client.core.config import APISettings, Settings, clear_settings_cache

BASE_URL = "http://testserver/api/"


# =============================================================================
# Fake Server
# =============================================================================


class FakeServer:
    """Stand-in for the autograder API.

    Routes are registered per (method, path) with either a JSON body, raw
    bytes, or a handler. JSON bodies are serialized at request time, so
    mutating a registered dict simulates an out-of-band server change.
    Unrouted requests get a 404. Every request is recorded.
    """

    def __init__(self, prefix: str = "/api") -> None:
        self.prefix = prefix
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def route(
        self,
        method: str,
        path: str,
        json: Any = None,
        status: int = 200,
        content: bytes | None = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        content_type: str = "application/octet-stream",
    ) -> None:
        if handler is None:
            if content is not None:
                def handler(request: httpx.Request) -> httpx.Response:
                    return httpx.Response(
                        status,
                        content=content,
                        headers={"content-type": content_type},
                    )
            elif json is None:
                def handler(request: httpx.Request) -> httpx.Response:
                    return httpx.Response(status)
            else:
                def handler(request: httpx.Request) -> httpx.Response:
                    return httpx.Response(status, json=json)

        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(self.prefix)
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not found."})
        return handler(request)

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == method
            and request.url.path.removeprefix(self.prefix) == path
        ]

    def last_json(self, method: str, path: str) -> Any:
        """Decoded JSON body of the last request to a route."""
        import json

        return json.loads(self.requests_to(method, path)[-1].content)


class EventRecorder:
    """Observer implementing every ``on_*`` method by recording the call."""

    def __init__(self) -> None:
        self.events: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str) -> Callable[..., None]:
        if name.startswith("on_"):
            def record(*args: Any) -> None:
                self.events.append((name, args))
            return record
        raise AttributeError(name)

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def last_args(self, name: str) -> tuple[Any, ...]:
        return [args for event, args in self.events if event == name][-1]


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def server() -> FakeServer:
    """Provide an empty fake server."""
    return FakeServer()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings pointing at the fake server."""
    return Settings(api=APISettings(base_url=BASE_URL, username_cookie="admin@example.com"))


@pytest_asyncio.fixture
async def client(server: FakeServer, test_settings: Settings) -> AsyncIterator[AutograderClient]:
    """Provide a client whose requests are served by the fake server."""
    ag_client = AutograderClient.from_settings(
        test_settings,
        transport=httpx.MockTransport(server.handle),
    )
    yield ag_client
    await ag_client.aclose()


@pytest.fixture
def recorder() -> EventRecorder:
    """Provide a fresh event recorder."""
    return EventRecorder()


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> None:
    clear_settings_cache()


# =============================================================================
# Record Builders
# =============================================================================


class Records:
    """Builders for server records, with overridable fields."""

    @staticmethod
    def course(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "name": "EECS 280",
            "semester": "Fall",
            "year": 2019,
            "subtitle": "Programming and Data Structures",
            "num_late_days": 2,
            "allowed_guest_domain": "",
            "last_modified": "2019-09-01T10:00:00Z",
            **overrides,
        }

    @staticmethod
    def user(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "username": f"user{pk}@example.com",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": f"user{pk}@example.com",
            "is_superuser": False,
            **overrides,
        }

    @staticmethod
    def project(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "name": "Project 1",
            "course": 1,
            "last_modified": "2019-09-01T10:00:00Z",
            "visible_to_students": False,
            "guests_can_submit": False,
            "max_group_size": 2,
            **overrides,
        }

    @staticmethod
    def submission(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "group": 3,
            "timestamp": "2019-09-02T10:00:00Z",
            "submitter": "user1@example.com",
            "submitted_filenames": ["main.cpp"],
            "discarded_files": [],
            "missing_files": {},
            "status": "queued",
            "count_towards_daily_limit": True,
            "is_past_daily_limit": False,
            "is_bonus_submission": False,
            "count_towards_total_limit": True,
            "does_not_count_for": [],
            "position_in_queue": 4,
            "last_modified": "2019-09-02T10:00:00Z",
            **overrides,
        }

    @staticmethod
    def instructor_file(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "project": 1,
            "name": "tests.py",
            "size": 4,
            "last_modified": "2019-09-01T10:00:00Z",
            **overrides,
        }

    @staticmethod
    def annotation(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "handgrading_rubric": 5,
            "short_description": "Magic number",
            "long_description": "Use a named constant instead",
            "deduction": -1,
            "max_deduction": -3,
            "last_modified": "2019-09-01T10:00:00Z",
            **overrides,
        }

    @staticmethod
    def criterion(pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "handgrading_rubric": 5,
            "short_description": "Good style",
            "long_description": "Consistent naming and indentation",
            "points": 2,
            "last_modified": "2019-09-01T10:00:00Z",
            **overrides,
        }

    @staticmethod
    def location(**overrides: Any) -> dict[str, Any]:
        return {
            "pk": 9,
            "first_line": 3,
            "last_line": 5,
            "filename": "main.cpp",
            "last_modified": "2019-09-01T10:00:00Z",
            **overrides,
        }

    @classmethod
    def rubric(cls, pk: int = 5, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "project": 1,
            "last_modified": "2019-09-01T10:00:00Z",
            "points_style": "start_at_zero_and_add",
            "max_points": None,
            "show_grades_and_rubric_to_students": False,
            "handgraders_can_leave_comments": True,
            "handgraders_can_adjust_points": False,
            "show_only_applied_rubric_to_students": False,
            "criteria": [cls.criterion(1), cls.criterion(2, short_description="Tests")],
            "annotations": [cls.annotation(1)],
            **overrides,
        }

    @classmethod
    def applied_annotation(cls, pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "last_modified": "2019-09-03T10:00:00Z",
            "location": cls.location(),
            "annotation": cls.annotation(1),
            "handgrading_result": 22,
            **overrides,
        }

    @classmethod
    def comment(cls, pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "last_modified": "2019-09-03T10:00:00Z",
            "location": cls.location(),
            "text": "Nice recursion",
            "handgrading_result": 22,
            **overrides,
        }

    @classmethod
    def criterion_result(cls, pk: int = 1, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "last_modified": "2019-09-03T10:00:00Z",
            "selected": False,
            "criterion": cls.criterion(1),
            "handgrading_result": 22,
            **overrides,
        }

    @classmethod
    def handgrading_result(cls, pk: int = 22, **overrides: Any) -> dict[str, Any]:
        return {
            "pk": pk,
            "last_modified": "2019-09-03T10:00:00Z",
            "submission": 1,
            "group": 3,
            "finished_grading": False,
            "points_adjustment": 0,
            "submitted_filenames": ["main.cpp"],
            "total_points": 2,
            "total_points_possible": 4,
            "handgrading_rubric": cls.rubric(),
            "applied_annotations": [cls.applied_annotation(1)],
            "comments": [cls.comment(1), cls.comment(2, text="Off by one", location=None)],
            "criterion_results": [
                cls.criterion_result(1),
                cls.criterion_result(2, selected=True, criterion=cls.criterion(2)),
            ],
            **overrides,
        }


@pytest.fixture
def records() -> type[Records]:
    """Provide server record builders."""
    return Records


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires a live server)"
    )
