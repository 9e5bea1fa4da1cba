from __future__ import annotations

import logging

from course_sync.classroom.courses import ClassroomGateway
from course_sync.models import (
    ACTION_CREATED,
    ACTION_NO_CHANGE,
    ACTION_UPDATED,
    CREATED_FIELDS,
    DIFFED_FIELDS,
    CourseChange,
    CourseIntent,
    RemoteCourse,
)

logger = logging.getLogger("course_sync.reconcile")


def diff_course_fields(existing: RemoteCourse, intent: CourseIntent) -> list[str]:
    """
    Fields whose remote value differs from the row, compared as exact strings.
    ownerId is included only when the row names a lead that is not the owner.
    """
    payload = intent.to_payload()
    changed = [name for name in DIFFED_FIELDS if existing.field_value(name) != payload[name]]
    if intent.teacher_email and existing.owner_id != intent.teacher_email:
        changed.append("ownerId")
    return changed


def create_or_update_course(
    gateway: ClassroomGateway,
    existing: RemoteCourse | None,
    intent: CourseIntent,
    current_user: str,
) -> CourseChange:
    payload = intent.to_payload()

    if existing is None:
        logger.info("no existing course found. creating new course: %s", intent.name)
        payload["ownerId"] = intent.teacher_email or current_user
        created = gateway.create_course(payload)
        return CourseChange(course=created, action=ACTION_CREATED, updated_fields=list(CREATED_FIELDS))

    logger.info("existing course found: %s", intent.name)
    fields = diff_course_fields(existing, intent)
    if not fields:
        logger.info("no updates needed for: %s", intent.name)
        return CourseChange(course=existing, action=ACTION_NO_CHANGE)

    if "ownerId" in fields:
        payload["ownerId"] = intent.teacher_email
    patch_body = {name: payload[name] for name in fields}
    updated = gateway.patch_course(patch_body, existing.id, fields)
    logger.info(
        "course details updated for: %s. updated fields: %s",
        intent.name,
        ",".join(fields),
    )
    return CourseChange(course=updated, action=ACTION_UPDATED, updated_fields=fields)
