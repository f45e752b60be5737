# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Courses and their rosters.

A course is the top of the autograder resource tree. Besides the usual
synced-entity operations it can be copied (the clone is announced with
``on_course_created``) and it manages four rosters: admins, staff,
students and handgraders. Roster changes are server-side only and fire no
events.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol
from urllib.parse import quote

from pydantic import BaseModel

from ag_client.core.sync import Deletable, Saveable
from ag_client.domains.user import User

if TYPE_CHECKING:
    from ag_client.client import AutograderClient

logger = logging.getLogger(__name__)


class Semester(str, Enum):
    fall = "Fall"
    winter = "Winter"
    spring = "Spring"
    summer = "Summer"


class CourseObserver(Protocol):
    def on_course_created(self, course: "Course") -> None: ...

    def on_course_changed(self, course: "Course") -> None: ...

    def on_course_deleted(self, course: "Course") -> None: ...


class NewCourseData(BaseModel):
    """Parameters accepted when creating a course.

    Only fields given explicitly are sent; the server fills in the rest.
    """

    name: str
    semester: Semester | None = None
    year: int | None = None
    subtitle: str | None = None
    num_late_days: int | None = None
    allowed_guest_domain: str | None = None


@dataclass
class CoursesForUser:
    """Courses grouped by the role a user holds in them."""

    courses_is_admin_for: list["Course"] = field(default_factory=list)
    courses_is_staff_for: list["Course"] = field(default_factory=list)
    courses_is_student_in: list["Course"] = field(default_factory=list)
    courses_is_handgrader_for: list["Course"] = field(default_factory=list)


class Course(Saveable, Deletable):
    """A course (e.g. "EECS 280, Fall 2019")."""

    EVENT_PREFIX = "course"
    DETAIL_PATH = "/courses/{pk}/"
    EDITABLE_FIELDS = (
        "name",
        "semester",
        "year",
        "subtitle",
        "num_late_days",
        "allowed_guest_domain",
    )

    name: str
    semester: Semester | None = None
    year: int | None = None
    subtitle: str = ""
    num_late_days: int = 0
    allowed_guest_domain: str = ""

    @classmethod
    async def get_all(cls, client: "AutograderClient") -> list["Course"]:
        return await cls._get_all(client, "/courses/")

    @classmethod
    async def get_by_pk(cls, client: "AutograderClient", course_pk: int) -> "Course":
        return await cls._get(client, f"/courses/{course_pk}/")

    @classmethod
    async def get_by_fields(
        cls,
        client: "AutograderClient",
        name: str,
        semester: Semester,
        year: int,
    ) -> "Course":
        """Look a course up by its natural key.

        Raises:
            NotFound: If no course has that name, semester and year.
        """
        path = f"/course/{quote(name, safe='')}/{Semester(semester).value}/{year}/"
        return await cls._get(client, path)

    @classmethod
    async def get_courses_for_user(
        cls,
        client: "AutograderClient",
        user: User,
    ) -> CoursesForUser:
        """Get every course a user holds a role in, grouped by role."""
        result = CoursesForUser()
        for role in (
            "courses_is_admin_for",
            "courses_is_staff_for",
            "courses_is_student_in",
            "courses_is_handgrader_for",
        ):
            courses = await cls._get_all(client, f"/users/{user.pk}/{role}/")
            setattr(result, role, courses)
        return result

    @classmethod
    async def create(cls, client: "AutograderClient", data: NewCourseData) -> "Course":
        """Create a course and notify ``on_course_created``."""
        return await cls._create(
            client,
            "/courses/",
            data.model_dump(mode="json", exclude_unset=True),
        )

    async def copy(
        self,
        new_name: str,
        new_semester: Semester | None = None,
        new_year: int | None = None,
    ) -> "Course":
        """Copy this course, its projects and settings into a new course.

        The clone is announced with ``on_course_created``.
        """
        payload = {
            "new_name": new_name,
            "new_semester": Semester(new_semester).value if new_semester else None,
            "new_year": new_year,
        }
        return await type(self)._create(
            self.client,
            f"/courses/{self.pk}/copy/",
            payload,
        )

    async def get_admins(self) -> list[User]:
        return await self._get_roster("admins")

    async def add_admins(self, usernames: list[str]) -> None:
        await self._add_to_roster("admins", usernames)

    async def remove_admins(self, users: list[User]) -> None:
        await self._remove_from_roster("admins", users)

    async def get_staff(self) -> list[User]:
        return await self._get_roster("staff")

    async def add_staff(self, usernames: list[str]) -> None:
        await self._add_to_roster("staff", usernames)

    async def remove_staff(self, users: list[User]) -> None:
        await self._remove_from_roster("staff", users)

    async def get_students(self) -> list[User]:
        return await self._get_roster("students")

    async def add_students(self, usernames: list[str]) -> None:
        await self._add_to_roster("students", usernames)

    async def remove_students(self, users: list[User]) -> None:
        await self._remove_from_roster("students", users)

    async def set_students(self, usernames: list[str]) -> None:
        """Replace the whole student roster."""
        await self.client.http.put(
            f"/courses/{self.pk}/students/",
            {"new_students": list(usernames)},
        )

    async def get_handgraders(self) -> list[User]:
        return await self._get_roster("handgraders")

    async def add_handgraders(self, usernames: list[str]) -> None:
        await self._add_to_roster("handgraders", usernames)

    async def remove_handgraders(self, users: list[User]) -> None:
        await self._remove_from_roster("handgraders", users)

    async def _get_roster(self, role: str) -> list[User]:
        response = await self.client.http.get(f"/courses/{self.pk}/{role}/")
        return [User.model_validate(item) for item in response.data or []]

    async def _add_to_roster(self, role: str, usernames: list[str]) -> None:
        await self.client.http.post(
            f"/courses/{self.pk}/{role}/",
            {f"new_{role}": list(usernames)},
        )
        logger.debug("Added %d users to %s of course %s", len(usernames), role, self.pk)

    async def _remove_from_roster(self, role: str, users: list[User]) -> None:
        await self.client.http.patch(
            f"/courses/{self.pk}/{role}/",
            {f"remove_{role}": [user.model_dump(mode="json") for user in users]},
        )
        logger.debug("Removed %d users from %s of course %s", len(users), role, self.pk)
