from __future__ import annotations

import logging
from typing import Any, Sequence

from course_sync.errors import ValidationError
from course_sync.models import (
    COLUMN_COURSE_ID,
    COLUMN_COURSE_LEADS,
    COLUMN_LAST_UPDATED,
    COLUMN_NAME,
    COLUMN_STUDENTS,
    COLUMN_SUBJECT,
    COLUMN_YEAR_GROUP,
    ColumnIndices,
    CourseIntent,
)

logger = logging.getLogger("course_sync.extractor")


def _index_of(headers: Sequence[Any], name: str) -> int | None:
    for index, header in enumerate(headers):
        if str(header) == name:
            return index
    return None


def get_column_indices(headers: Sequence[Any]) -> ColumnIndices:
    return ColumnIndices(
        name=_index_of(headers, COLUMN_NAME),
        course_leads=_index_of(headers, COLUMN_COURSE_LEADS),
        subject=_index_of(headers, COLUMN_SUBJECT),
        year_group=_index_of(headers, COLUMN_YEAR_GROUP),
        course_id=_index_of(headers, COLUMN_COURSE_ID),
        last_updated=_index_of(headers, COLUMN_LAST_UPDATED),
        students=_index_of(headers, COLUMN_STUDENTS),
    )


def cell_text(row: Sequence[Any], index: int | None) -> str:
    """Return the cell at ``index`` as text; absent columns and short rows read as ''."""
    if index is None or index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_empty_row(row: Sequence[Any]) -> bool:
    return all(cell_text(row, index) == "" for index in range(len(row)))


def parse_student_emails(raw: str) -> list[str]:
    return [email.strip() for email in raw.split(",") if email.strip()]


def build_description(subject: str, year_group: str) -> str:
    return f"Subject: {subject or 'N/A'}\nYear Group: {year_group or 'N/A'}"


def extract_course_intent(row: Sequence[Any], indices: ColumnIndices) -> CourseIntent:
    raw_name = cell_text(row, indices.name)
    teacher_email = cell_text(row, indices.course_leads).strip() or None
    subject = cell_text(row, indices.subject)
    year_group = cell_text(row, indices.year_group)
    students = parse_student_emails(cell_text(row, indices.students))

    logger.info(
        'raw course data: name: "%s", subject: "%s", teacher: "%s"',
        raw_name,
        subject,
        teacher_email,
    )
    logger.info("extracted %d student emails for course: %s", len(students), raw_name)

    name = raw_name.strip()
    if not name:
        raise ValidationError(f'course name is empty or undefined. raw value: "{raw_name}"')

    return CourseIntent(
        name=name,
        teacher_email=teacher_email,
        description=build_description(subject, year_group),
        course_id=cell_text(row, indices.course_id).strip() or None,
        students=students,
    )
