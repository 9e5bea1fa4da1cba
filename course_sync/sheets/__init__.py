"""
Google Sheets access for the course roster and the audit log
"""
from .client import SheetTable, column_a1, quote_title

__all__ = ['SheetTable', 'column_a1', 'quote_title']
