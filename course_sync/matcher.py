from __future__ import annotations

from typing import Iterable

from course_sync.models import CourseIntent, RemoteCourse


def find_existing_course(
    existing_courses: Iterable[RemoteCourse],
    intent: CourseIntent,
) -> RemoteCourse | None:
    """
    Match by course id first, then by exact (case-sensitive) name.
    The first hit in listing order wins.
    """
    courses = list(existing_courses)
    if intent.course_id:
        for course in courses:
            if course.id == intent.course_id:
                return course
    for course in courses:
        if course.name == intent.name:
            return course
    return None
