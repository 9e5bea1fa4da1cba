"""
Google Classroom integration components
"""
from .client import get_classroom_service, get_credentials, get_sheets_service
from .courses import ClassroomGateway

__all__ = [
    'ClassroomGateway',
    'get_classroom_service',
    'get_credentials',
    'get_sheets_service',
]
