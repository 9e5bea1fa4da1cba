from __future__ import annotations

import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from course_sync.settings import resolve_credentials_path, resolve_token_path

logger = logging.getLogger("course_sync.classroom.client")

SCOPES = [
    "https://www.googleapis.com/auth/classroom.courses",
    "https://www.googleapis.com/auth/classroom.rosters",
    "https://www.googleapis.com/auth/classroom.profile.emails",
    "https://www.googleapis.com/auth/spreadsheets",
]


def get_credentials(
    credentials_file: str | Path | None = None,
    token_file: str | Path | None = None,
) -> Credentials:
    credentials_path = resolve_credentials_path(credentials_file)
    token_path = resolve_token_path(token_file)

    creds = None
    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), SCOPES)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        logger.info("Refreshing Google token %s", token_path)
        creds.refresh(Request())
    else:
        if not credentials_path.exists():
            raise FileNotFoundError(
                "Google Classroom credentials file not found: "
                f"{credentials_path}. Set GOOGLE_CLASSROOM_CREDENTIALS_FILE in .env."
            )
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), SCOPES)
        creds = flow.run_local_server(port=0)

    token_path.parent.mkdir(parents=True, exist_ok=True)
    token_path.write_text(creds.to_json(), encoding="utf-8")
    return creds


def get_classroom_service(credentials: Credentials):
    return build("classroom", "v1", credentials=credentials, cache_discovery=False)


def get_sheets_service(credentials: Credentials):
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)
