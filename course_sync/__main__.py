"""
Run one sync pass over the roster spreadsheet.
Usage: python -m course_sync
"""
from course_sync.classroom import ClassroomGateway, get_classroom_service, get_credentials, get_sheets_service
from course_sync.orchestrator import manage_classrooms
from course_sync.settings import configure_logging, load_settings
from course_sync.sheets import SheetTable


def main():
    configure_logging()
    settings = load_settings()

    credentials = get_credentials(settings.credentials_path, settings.token_path)
    gateway = ClassroomGateway(get_classroom_service(credentials))
    sheets_service = get_sheets_service(credentials)

    manage_classrooms(
        gateway,
        SheetTable(sheets_service, settings.spreadsheet_id, settings.main_sheet),
        SheetTable(sheets_service, settings.spreadsheet_id, settings.log_sheet),
        excluded_keywords=settings.excluded_keywords,
    )


if __name__ == "__main__":
    main()
