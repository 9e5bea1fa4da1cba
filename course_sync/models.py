"""
Data models for syncing spreadsheet rows to Classroom courses
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ACTION_CREATED = "Created"
ACTION_UPDATED = "Updated"
ACTION_NO_CHANGE = "No changes needed"
ACTION_ERROR = "Error"

COURSE_STATE_ACTIVE = "ACTIVE"

COLUMN_NAME = "Course/Class Name"
COLUMN_COURSE_LEADS = "Course Leads this academic year"
COLUMN_SUBJECT = "Subject"
COLUMN_YEAR_GROUP = "Year Group"
COLUMN_COURSE_ID = "Course ID"
COLUMN_LAST_UPDATED = "Last Updated"
COLUMN_STUDENTS = "Students"

# Columns appended to the main sheet when missing, in this order.
BOOTSTRAP_COLUMNS = (COLUMN_COURSE_ID, COLUMN_LAST_UPDATED)

LOG_HEADER = ["Timestamp", "Course Name", "Action", "Course ID", "Notes"]

# Course fields compared on every matched row; ownerId is handled separately.
DIFFED_FIELDS = ("name", "descriptionHeading", "description")
CREATED_FIELDS = ("name", "descriptionHeading", "description", "ownerId")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class CourseIntent:
    name: str
    teacher_email: str | None
    description: str
    course_id: str | None = None
    students: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, str]:
        return {
            "name": self.name,
            "descriptionHeading": self.name,
            "description": self.description,
            "courseState": COURSE_STATE_ACTIVE,
        }


@dataclass
class RemoteCourse:
    id: str
    name: str = ""
    owner_id: str = ""
    description_heading: str = ""
    description: str = ""
    course_state: str = ""

    _API_FIELDS = {
        "id": "id",
        "name": "name",
        "ownerId": "owner_id",
        "descriptionHeading": "description_heading",
        "description": "description",
        "courseState": "course_state",
    }

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "RemoteCourse":
        values = {
            attr: str(payload.get(api_name) or "")
            for api_name, attr in cls._API_FIELDS.items()
        }
        return cls(**values)

    def field_value(self, api_name: str) -> str:
        return getattr(self, self._API_FIELDS[api_name])


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    course_name: str
    action: str
    course_id: str
    notes: str

    def as_row(self) -> list[str]:
        return [
            self.timestamp.strftime(TIMESTAMP_FORMAT),
            self.course_name,
            self.action,
            self.course_id,
            self.notes,
        ]


@dataclass(frozen=True)
class PendingWrite:
    # 1-based sheet coordinates.
    row: int
    column: int
    value: str


@dataclass(frozen=True)
class ColumnIndices:
    name: int | None
    course_leads: int | None
    subject: int | None
    year_group: int | None
    course_id: int | None
    last_updated: int | None
    students: int | None


@dataclass
class CourseChange:
    course: RemoteCourse | None
    action: str
    updated_fields: list[str] = field(default_factory=list)


@dataclass
class SubOperationResult:
    success: bool
    message: str
    added: int = 0
    failed: int = 0


@dataclass
class RowOutcome:
    row_number: int
    course_name: str
    action: str
    course_id: str = ""
    notes: str = ""
    updated_fields: list[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.action == ACTION_ERROR

    @classmethod
    def error(cls, row_number: int, course_name: str, notes: str) -> "RowOutcome":
        return cls(row_number=row_number, course_name=course_name, action=ACTION_ERROR, notes=notes)


@dataclass
class SyncTotals:
    rows_seen: int = 0
    rows_skipped: int = 0
    courses_created: int = 0
    courses_updated: int = 0
    courses_unchanged: int = 0
    rows_failed: int = 0
    cells_written: int = 0
    log_rows_added: int = 0

    def apply_outcome(self, outcome: RowOutcome) -> None:
        if outcome.action == ACTION_CREATED:
            self.courses_created += 1
        elif outcome.action == ACTION_UPDATED:
            self.courses_updated += 1
        elif outcome.action == ACTION_NO_CHANGE:
            self.courses_unchanged += 1
        else:
            self.rows_failed += 1
