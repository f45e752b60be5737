# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course domain."""

from ag_client.domains.course.models import (
    Course,
    CourseObserver,
    CoursesForUser,
    NewCourseData,
    Semester,
)

__all__ = [
    "Course",
    "CourseObserver",
    "CoursesForUser",
    "NewCourseData",
    "Semester",
]
