"""
course_sync - Keeps Google Classroom courses in line with a roster spreadsheet
"""
from .orchestrator import manage_classrooms

__all__ = ['manage_classrooms']
