from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

from course_sync.classroom.courses import ClassroomGateway
from course_sync.errors import BulkWriteError, CourseSyncError
from course_sync.extractor import cell_text, extract_course_intent, get_column_indices, is_empty_row
from course_sync.matcher import find_existing_course
from course_sync.models import (
    BOOTSTRAP_COLUMNS,
    LOG_HEADER,
    TIMESTAMP_FORMAT,
    ColumnIndices,
    LogEntry,
    PendingWrite,
    RemoteCourse,
    RowOutcome,
    SyncTotals,
)
from course_sync.reconcile import create_or_update_course
from course_sync.roster import enroll_students, set_lead_teacher
from course_sync.settings import DEFAULT_EXCLUDED_KEYWORDS
from course_sync.sheets.client import SheetTable

logger = logging.getLogger("course_sync.orchestrator")

Clock = Callable[[], datetime]


@dataclass
class BatchUpdates:
    """Sheet cell writes and audit rows collected during one pass."""

    writes: list[PendingWrite] = field(default_factory=list)
    log_entries: list[LogEntry] = field(default_factory=list)

    def record(
        self,
        outcome: RowOutcome,
        row: Sequence[Any],
        indices: ColumnIndices,
        timestamp: datetime,
    ) -> None:
        if not outcome.is_error and outcome.course_id:
            # An id already in the sheet is never overwritten.
            if indices.course_id is not None and not cell_text(row, indices.course_id).strip():
                self.writes.append(
                    PendingWrite(row=outcome.row_number, column=indices.course_id + 1, value=outcome.course_id)
                )
            if indices.last_updated is not None:
                self.writes.append(
                    PendingWrite(
                        row=outcome.row_number,
                        column=indices.last_updated + 1,
                        value=timestamp.strftime(TIMESTAMP_FORMAT),
                    )
                )
        self.log_entries.append(
            LogEntry(
                timestamp=timestamp,
                course_name=outcome.course_name,
                action=outcome.action,
                course_id=outcome.course_id,
                notes=outcome.notes,
            )
        )


def is_excluded(course_name: str, excluded_keywords: Iterable[str]) -> bool:
    return any(keyword and keyword in course_name for keyword in excluded_keywords)


def build_notes(action: str, teacher_message: str, student_message: str, updated_fields: list[str]) -> str:
    notes = f"{action}. {teacher_message} {student_message}"
    if updated_fields:
        notes += f" updated fields: {', '.join(updated_fields)}."
    return notes


def sync_row(
    gateway: ClassroomGateway,
    row: Sequence[Any],
    row_number: int,
    indices: ColumnIndices,
    existing_courses: list[RemoteCourse],
    current_user: str,
) -> RowOutcome:
    """Run extraction, matching, create/patch and roster sync for one sheet row."""
    raw_name = cell_text(row, indices.name)
    try:
        intent = extract_course_intent(row, indices)
        existing = find_existing_course(existing_courses, intent)
        change = create_or_update_course(gateway, existing, intent, current_user)
    except CourseSyncError as exc:
        return _row_error(row_number, raw_name, str(exc))
    except Exception as exc:
        logger.exception("unexpected failure in row %d", row_number)
        return _row_error(row_number, raw_name, str(exc) or exc.__class__.__name__)

    course_id = change.course.id if change.course else ""
    if not course_id:
        logger.error("invalid course id for %s", intent.name)
        return RowOutcome.error(row_number, intent.name, f"invalid course id for {intent.name}")

    teacher_result = set_lead_teacher(gateway, course_id, intent.teacher_email)
    student_result = enroll_students(gateway, course_id, intent.students)

    return RowOutcome(
        row_number=row_number,
        course_name=intent.name,
        action=change.action,
        course_id=course_id,
        notes=build_notes(change.action, teacher_result.message, student_result.message, change.updated_fields),
        updated_fields=change.updated_fields,
    )


def _row_error(row_number: int, course_name: str, message: str) -> RowOutcome:
    notes = f"failed to process course: {course_name} (row {row_number}). error: {message}"
    logger.error(notes)
    return RowOutcome.error(row_number, course_name, notes)


def apply_sheet_writes(sheet: SheetTable, writes: list[PendingWrite]) -> int:
    if not writes:
        return 0
    try:
        written = sheet.write_cells(writes)
    except BulkWriteError as exc:
        logger.error("failed to update main sheet: %s", exc.message)
        return 0
    except Exception as exc:
        logger.error("failed to update main sheet: %s", str(exc) or exc.__class__.__name__)
        return 0
    logger.info("updated %d cells in main sheet", written)
    return written


def append_log_entries(log_sheet: SheetTable, entries: list[LogEntry]) -> int:
    if not entries:
        return 0
    try:
        added = log_sheet.append_rows([entry.as_row() for entry in entries])
    except BulkWriteError as exc:
        logger.error("failed to update log sheet: %s", exc.message)
        return 0
    except Exception as exc:
        logger.error("failed to update log sheet: %s", str(exc) or exc.__class__.__name__)
        return 0
    logger.info("added %d entries to log sheet", added)
    return added


def load_rows(main_sheet: SheetTable) -> list[list[Any]]:
    """Add any missing bootstrap columns, then read the sheet once."""
    for column_name in BOOTSTRAP_COLUMNS:
        main_sheet.ensure_column(column_name)
    return main_sheet.read_all_rows()


def manage_classrooms(
    gateway: ClassroomGateway,
    main_sheet: SheetTable,
    log_sheet: SheetTable,
    *,
    excluded_keywords: Iterable[str] = DEFAULT_EXCLUDED_KEYWORDS,
    clock: Clock = datetime.now,
) -> SyncTotals | None:
    """
    Create or update one Classroom course per sheet row, then write ids,
    timestamps and audit rows back in two batched writes.
    """
    if not main_sheet.exists() or not log_sheet.exists():
        logger.error("main sheet or log sheet not found. please check the sheet names.")
        return None

    excluded = tuple(excluded_keywords)
    log_sheet.ensure_header(LOG_HEADER)
    rows = load_rows(main_sheet)
    headers = rows[0] if rows else main_sheet.read_header_row()
    indices = get_column_indices(headers)

    current_user = gateway.current_user_email()
    existing_courses = gateway.list_courses()

    totals = SyncTotals()
    batch = BatchUpdates()

    for row_number, row in enumerate(rows[1:], start=2):
        totals.rows_seen += 1
        if is_empty_row(row):
            logger.info("skipping empty row %d", row_number)
            totals.rows_skipped += 1
            continue

        course_name = cell_text(row, indices.name)
        if is_excluded(course_name, excluded):
            logger.info("skipping %s course", course_name)
            totals.rows_skipped += 1
            continue

        has_id = bool(cell_text(row, indices.course_id).strip())
        logger.info(
            "processing row %d: %s",
            row_number,
            "updating existing course" if has_id else "creating new course",
        )
        outcome = sync_row(gateway, row, row_number, indices, existing_courses, current_user)
        totals.apply_outcome(outcome)
        batch.record(outcome, row, indices, clock())

    totals.cells_written = apply_sheet_writes(main_sheet, batch.writes)
    totals.log_rows_added = append_log_entries(log_sheet, batch.log_entries)

    logger.info(
        "sync finished: created=%d updated=%d unchanged=%d errors=%d skipped=%d",
        totals.courses_created,
        totals.courses_updated,
        totals.courses_unchanged,
        totals.rows_failed,
        totals.rows_skipped,
    )
    return totals
