from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parents[1]
load_dotenv(BASE_DIR / ".env", override=False)

DEFAULT_EXCLUDED_KEYWORDS = ("Homeroom", "Intervention")
LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_path(raw_value: str | Path | None, default_relative: str) -> Path:
    if raw_value is None or str(raw_value).strip() == "":
        path = BASE_DIR / default_relative
    else:
        path = Path(raw_value)
        if not path.is_absolute():
            path = BASE_DIR / path
    return path.resolve()


def _text_env(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip() or default


def resolve_credentials_path(path: str | Path | None = None) -> Path:
    return _resolve_path(
        path or os.getenv("GOOGLE_CLASSROOM_CREDENTIALS_FILE"),
        "credentials/client_secrets.json",
    )


def resolve_token_path(path: str | Path | None = None) -> Path:
    return _resolve_path(
        path or os.getenv("GOOGLE_CLASSROOM_TOKEN_FILE"),
        "credentials/token.json",
    )


def spreadsheet_id() -> str:
    return (os.getenv("COURSE_SYNC_SPREADSHEET_ID") or "").strip()


def main_sheet_name() -> str:
    return _text_env("COURSE_SYNC_MAIN_SHEET", "Sheet1")


def log_sheet_name() -> str:
    return _text_env("COURSE_SYNC_LOG_SHEET", "Sheet2")


def excluded_keywords() -> tuple[str, ...]:
    raw = os.getenv("COURSE_SYNC_EXCLUDED_KEYWORDS")
    if raw is None or raw.strip() == "":
        return DEFAULT_EXCLUDED_KEYWORDS
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def log_level() -> int:
    name = _text_env("COURSE_SYNC_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


@dataclass(frozen=True)
class SyncSettings:
    spreadsheet_id: str
    main_sheet: str
    log_sheet: str
    credentials_path: Path
    token_path: Path
    excluded_keywords: tuple[str, ...] = DEFAULT_EXCLUDED_KEYWORDS


def load_settings() -> SyncSettings:
    sheet_id = spreadsheet_id()
    if not sheet_id:
        raise ValueError("COURSE_SYNC_SPREADSHEET_ID is missing from .env")
    return SyncSettings(
        spreadsheet_id=sheet_id,
        main_sheet=main_sheet_name(),
        log_sheet=log_sheet_name(),
        credentials_path=resolve_credentials_path(),
        token_path=resolve_token_path(),
        excluded_keywords=excluded_keywords(),
    )


def configure_logging(level: int | None = None) -> None:
    logging.basicConfig(
        level=level if level is not None else log_level(),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
