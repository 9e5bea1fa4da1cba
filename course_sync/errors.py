"""
Error types raised while syncing spreadsheet rows to Classroom courses.
"""
from __future__ import annotations


class CourseSyncError(Exception):
    """Base class for every error this package raises."""


class ValidationError(CourseSyncError):
    """A spreadsheet row cannot be turned into a course."""


class RemoteCallError(CourseSyncError):
    """A Classroom API call failed."""

    def __init__(self, operation: str, message: str, status: int | None = None):
        self.operation = operation
        self.status = status
        self.message = message
        super().__init__(message)


class BulkWriteError(CourseSyncError):
    """The final batched write to a sheet failed."""

    def __init__(self, sheet_name: str, message: str):
        self.sheet_name = sheet_name
        self.message = message
        super().__init__(f"{sheet_name}: {message}")
