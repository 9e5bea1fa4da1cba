from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence

from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from course_sync.errors import BulkWriteError, RemoteCallError
from course_sync.models import PendingWrite

logger = logging.getLogger("course_sync.sheets")

VALUE_INPUT_OPTION = "RAW"


def quote_title(title: str) -> str:
    return "'" + title.replace("'", "''") + "'"


def column_a1(column: int) -> str:
    """1-based column number to A1 letters (1 -> A, 27 -> AA)."""
    if column < 1:
        raise ValueError(f"column must be >= 1, got {column}")
    letters = ""
    while column:
        column, remainder = divmod(column - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def cell_a1(title: str, row: int, column: int) -> str:
    return f"{quote_title(title)}!{column_a1(column)}{row}"


class SheetTable:
    """One tab of a spreadsheet, read and written through the Sheets v4 values API."""

    def __init__(self, service, spreadsheet_id: str, title: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.title = title

    def _call(self, operation: str, request_factory: Callable[[], Any]) -> dict[str, Any]:
        try:
            return request_factory().execute() or {}
        except HttpError as exc:
            status = getattr(exc.resp, "status", None)
            raise RemoteCallError(operation, str(getattr(exc, "reason", None) or exc), status=status) from exc
        except (HttpLib2Error, GoogleAuthError, OSError) as exc:
            raise RemoteCallError(operation, str(exc) or exc.__class__.__name__) from exc

    def _properties(self) -> dict[str, Any] | None:
        response = self._call(
            "spreadsheets.get",
            lambda: self.service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets.properties",
            ),
        )
        for sheet in response.get("sheets", []):
            props = sheet.get("properties", {})
            if props.get("title") == self.title:
                return props
        return None

    def exists(self) -> bool:
        return self._properties() is not None

    def _get_values(self, range_spec: str) -> list[list[Any]]:
        response = self._call(
            "spreadsheets.values.get",
            lambda: self.service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=range_spec,
            ),
        )
        return response.get("values", [])

    def read_all_rows(self) -> list[list[Any]]:
        return self._get_values(quote_title(self.title))

    def read_header_row(self) -> list[Any]:
        rows = self._get_values(f"{quote_title(self.title)}!1:1")
        return rows[0] if rows else []

    def ensure_column(self, name: str) -> bool:
        """Append ``name`` to the header row when absent. True when it was added."""
        headers = self.read_header_row()
        if name in [str(header) for header in headers]:
            return False

        column = len(headers) + 1
        props = self._properties() or {}
        column_count = props.get("gridProperties", {}).get("columnCount", 0)
        if column > column_count:
            self._call(
                "spreadsheets.batchUpdate",
                lambda: self.service.spreadsheets().batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={
                        "requests": [
                            {
                                "appendDimension": {
                                    "sheetId": props.get("sheetId", 0),
                                    "dimension": "COLUMNS",
                                    "length": column - column_count,
                                }
                            }
                        ]
                    },
                ),
            )
        self._call(
            "spreadsheets.values.update",
            lambda: self.service.spreadsheets().values().update(
                spreadsheetId=self.spreadsheet_id,
                range=cell_a1(self.title, 1, column),
                valueInputOption=VALUE_INPUT_OPTION,
                body={"values": [[name]]},
            ),
        )
        logger.info("created %s column in %s", name, self.title)
        return True

    def ensure_header(self, header: Sequence[str]) -> bool:
        """Write ``header`` as the first row of an empty tab. True when written."""
        if self.read_all_rows():
            return False
        self._call(
            "spreadsheets.values.append",
            lambda: self._append_request([list(header)]),
        )
        logger.info("initialized header row in %s", self.title)
        return True

    def _append_request(self, rows: list[list[Any]]):
        return self.service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=quote_title(self.title),
            valueInputOption=VALUE_INPUT_OPTION,
            insertDataOption="INSERT_ROWS",
            body={"values": rows},
        )

    def write_cells(self, writes: Iterable[PendingWrite]) -> int:
        data = [
            {"range": cell_a1(self.title, write.row, write.column), "values": [[write.value]]}
            for write in writes
        ]
        if not data:
            return 0
        try:
            self._call(
                "spreadsheets.values.batchUpdate",
                lambda: self.service.spreadsheets().values().batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={"valueInputOption": VALUE_INPUT_OPTION, "data": data},
                ),
            )
        except RemoteCallError as exc:
            raise BulkWriteError(self.title, exc.message) from exc
        return len(data)

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> int:
        values = [list(row) for row in rows]
        if not values:
            return 0
        try:
            self._call("spreadsheets.values.append", lambda: self._append_request(values))
        except RemoteCallError as exc:
            raise BulkWriteError(self.title, exc.message) from exc
        return len(values)
