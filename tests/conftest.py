"""
Shared fakes for the Classroom gateway and spreadsheet tabs.
"""
import copy
from datetime import datetime

import pytest

from course_sync.errors import BulkWriteError, RemoteCallError
from course_sync.models import RemoteCourse

HEADER = [
    "Course/Class Name",
    "Course Leads this academic year",
    "Subject",
    "Year Group",
    "Course ID",
    "Last Updated",
    "Students",
]

FIXED_NOW = datetime(2026, 1, 5, 9, 30, 0)


class FakeClassroom:
    def __init__(self, courses=None, user="me@school.org"):
        self.courses = list(courses or [])
        self.user = user
        self.created = []
        self.patched = []
        self.teachers = []
        self.students = []
        self.list_calls = 0
        self.failing_teachers = set()
        self.failing_students = set()
        self.student_errors = {}
        self.fail_create = None
        self.fail_patch = None
        self.omit_created_id = False
        self._next_id = 1000

    @property
    def mutating_calls(self):
        return len(self.created) + len(self.patched) + len(self.teachers) + len(self.students)

    def current_user_email(self):
        return self.user

    def list_courses(self):
        self.list_calls += 1
        return [copy.copy(course) for course in self.courses]

    def create_course(self, payload):
        if self.fail_create:
            raise RemoteCallError("courses.create", self.fail_create, status=400)
        self.created.append(dict(payload))
        self._next_id += 1
        course = RemoteCourse(
            id="" if self.omit_created_id else str(self._next_id),
            name=payload["name"],
            owner_id=payload.get("ownerId", ""),
            description_heading=payload["descriptionHeading"],
            description=payload["description"],
            course_state=payload["courseState"],
        )
        if course.id:
            self.courses.append(course)
        return copy.copy(course)

    def patch_course(self, payload, course_id, update_mask):
        if self.fail_patch:
            raise RemoteCallError("courses.patch", self.fail_patch, status=400)
        self.patched.append((dict(payload), course_id, list(update_mask)))
        for course in self.courses:
            if course.id == course_id:
                for name in update_mask:
                    setattr(course, RemoteCourse._API_FIELDS[name], payload[name])
                return copy.copy(course)
        raise RemoteCallError("courses.patch", "not found", status=404)

    def add_teacher(self, course_id, user_id):
        if user_id in self.failing_teachers:
            raise RemoteCallError("courses.teachers.create", f"{user_id} is not a known user", status=404)
        self.teachers.append((course_id, user_id))

    def add_student(self, course_id, user_id):
        if user_id in self.student_errors:
            raise self.student_errors[user_id]
        if user_id in self.failing_students:
            raise RemoteCallError("courses.students.create", f"{user_id} is not a known user", status=404)
        self.students.append((course_id, user_id))


class FakeSheet:
    def __init__(self, title, rows=None, present=True):
        self.title = title
        self.rows = [list(row) for row in (rows or [])]
        self.present = present
        self.writes = []
        self.appended = []
        self.fail_writes = False

    def exists(self):
        return self.present

    def read_all_rows(self):
        return [list(row) for row in self.rows]

    def read_header_row(self):
        return list(self.rows[0]) if self.rows else []

    def ensure_column(self, name):
        if not self.rows:
            self.rows.append([])
        if name in self.rows[0]:
            return False
        self.rows[0].append(name)
        return True

    def ensure_header(self, header):
        if self.rows:
            return False
        self.rows.append(list(header))
        return True

    def write_cells(self, writes):
        if self.fail_writes:
            raise BulkWriteError(self.title, "quota exceeded")
        writes = list(writes)
        for write in writes:
            row = self.rows[write.row - 1]
            while len(row) < write.column:
                row.append("")
            row[write.column - 1] = write.value
        self.writes.extend(writes)
        return len(writes)

    def append_rows(self, rows):
        if self.fail_writes:
            raise BulkWriteError(self.title, "quota exceeded")
        rows = [list(row) for row in rows]
        self.rows.extend(rows)
        self.appended.extend(rows)
        return len(rows)


def make_row(name="", lead="", subject="", year="", course_id="", updated="", students=""):
    return [name, lead, subject, year, course_id, updated, students]


@pytest.fixture
def classroom():
    return FakeClassroom()


@pytest.fixture
def log_sheet():
    return FakeSheet("Sheet2")


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
