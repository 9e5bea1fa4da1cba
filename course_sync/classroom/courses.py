from __future__ import annotations

import logging
from typing import Any, Callable

from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from course_sync.errors import RemoteCallError
from course_sync.models import RemoteCourse

logger = logging.getLogger("course_sync.classroom.courses")

PAGE_SIZE = 100


def _http_error_message(exc: HttpError) -> str:
    reason = getattr(exc, "reason", None)
    return str(reason or exc)


class ClassroomGateway:
    """Thin wrapper over the Classroom v1 discovery service."""

    def __init__(self, service):
        self.service = service

    def _execute(self, operation: str, request_factory: Callable[[], Any]) -> dict[str, Any]:
        try:
            return request_factory().execute() or {}
        except HttpError as exc:
            status = getattr(exc.resp, "status", None)
            raise RemoteCallError(operation, _http_error_message(exc), status=status) from exc
        except (HttpLib2Error, GoogleAuthError, OSError) as exc:
            raise RemoteCallError(operation, str(exc) or exc.__class__.__name__) from exc

    def list_courses(self) -> list[RemoteCourse]:
        """All courses where the signed-in user teaches, every page."""
        logger.info("fetching courses from api")
        courses: list[RemoteCourse] = []
        page_token = None
        while True:
            response = self._execute(
                "courses.list",
                lambda: self.service.courses().list(
                    teacherId="me", pageToken=page_token, pageSize=PAGE_SIZE
                ),
            )
            courses.extend(RemoteCourse.from_api(item) for item in response.get("courses", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        logger.info("fetched %d courses", len(courses))
        return courses

    def create_course(self, payload: dict[str, str]) -> RemoteCourse:
        response = self._execute(
            "courses.create",
            lambda: self.service.courses().create(body=payload),
        )
        return RemoteCourse.from_api(response)

    def patch_course(self, payload: dict[str, str], course_id: str, update_mask: list[str]) -> RemoteCourse:
        response = self._execute(
            "courses.patch",
            lambda: self.service.courses().patch(
                id=course_id, updateMask=",".join(update_mask), body=payload
            ),
        )
        return RemoteCourse.from_api(response)

    def add_teacher(self, course_id: str, user_id: str) -> None:
        self._execute(
            "courses.teachers.create",
            lambda: self.service.courses().teachers().create(
                courseId=course_id, body={"userId": user_id}
            ),
        )

    def add_student(self, course_id: str, user_id: str) -> None:
        self._execute(
            "courses.students.create",
            lambda: self.service.courses().students().create(
                courseId=course_id, body={"userId": user_id}
            ),
        )

    def current_user_email(self) -> str:
        profile = self._execute(
            "userProfiles.get",
            lambda: self.service.userProfiles().get(userId="me"),
        )
        return str(profile.get("emailAddress") or "")
