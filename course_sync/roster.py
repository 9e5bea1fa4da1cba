from __future__ import annotations

import logging
from typing import Sequence

from course_sync.classroom.courses import ClassroomGateway
from course_sync.errors import RemoteCallError
from course_sync.models import SubOperationResult

logger = logging.getLogger("course_sync.roster")


def _error_message(exc: Exception) -> str:
    if isinstance(exc, RemoteCallError):
        return exc.message
    return str(exc) or exc.__class__.__name__


def set_lead_teacher(
    gateway: ClassroomGateway,
    course_id: str,
    teacher_email: str | None,
) -> SubOperationResult:
    if not teacher_email:
        return SubOperationResult(
            success=True,
            message="no course lead specified, current user remains as owner.",
        )

    try:
        gateway.add_teacher(course_id, teacher_email)
    except Exception as exc:
        message = _error_message(exc)
        logger.warning("failed to set head teacher for course: %s. error: %s", course_id, message)
        return SubOperationResult(success=False, message=f"failed to set head teacher: {message}")

    logger.info("set %s as head teacher for course: %s", teacher_email, course_id)
    return SubOperationResult(success=True, message=f"{teacher_email} set as head teacher.")


def enroll_students(
    gateway: ClassroomGateway,
    course_id: str,
    student_emails: Sequence[str],
) -> SubOperationResult:
    added = 0
    failed = 0
    logger.info("attempting to add %d students to course %s", len(student_emails), course_id)

    for email in student_emails:
        try:
            gateway.add_student(course_id, email)
        except Exception as exc:
            failed += 1
            logger.warning(
                "failed to add student: %s to course: %s. error: %s",
                email,
                course_id,
                _error_message(exc),
            )
            continue
        added += 1
        logger.info("successfully added student: %s to course: %s", email, course_id)

    # An empty roster counts as done.
    result = SubOperationResult(
        success=added > 0 or not student_emails,
        message=f"added {added} students. failed to add {failed} students.",
        added=added,
        failed=failed,
    )
    logger.info("student addition result: %s", result.message)
    return result
