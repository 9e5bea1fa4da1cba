import pytest

from course_sync.errors import ValidationError
from course_sync.extractor import (
    build_description,
    cell_text,
    extract_course_intent,
    get_column_indices,
    is_empty_row,
    parse_student_emails,
)
from tests.conftest import HEADER, make_row


@pytest.fixture
def indices():
    return get_column_indices(HEADER)


def test_column_indices_are_order_independent():
    shuffled = ["Students", "Subject", "Course/Class Name", "Unrelated"]
    indices = get_column_indices(shuffled)
    assert indices.name == 2
    assert indices.subject == 1
    assert indices.students == 0
    assert indices.course_id is None
    assert indices.last_updated is None


def test_extracts_full_row(indices):
    row = make_row(
        name="  Biology 101 ",
        lead="lead@school.org",
        subject="Science",
        year="9",
        course_id="12345",
        students="a@x.com, b@x.com",
    )
    intent = extract_course_intent(row, indices)
    assert intent.name == "Biology 101"
    assert intent.teacher_email == "lead@school.org"
    assert intent.description == "Subject: Science\nYear Group: 9"
    assert intent.course_id == "12345"
    assert intent.students == ["a@x.com", "b@x.com"]


def test_missing_subject_and_year_fall_back_to_na(indices):
    intent = extract_course_intent(make_row(name="Art"), indices)
    assert intent.description == "Subject: N/A\nYear Group: N/A"
    assert intent.teacher_email is None
    assert intent.course_id is None
    assert intent.students == []


@pytest.mark.parametrize("raw", ["", "   ", "\t"])
def test_blank_name_is_rejected_with_raw_value(indices, raw):
    with pytest.raises(ValidationError) as excinfo:
        extract_course_intent(make_row(name=raw, subject="Science"), indices)
    assert "course name is empty or undefined" in str(excinfo.value)
    assert f'raw value: "{raw}"' in str(excinfo.value)


def test_student_list_drops_empty_tokens_and_keeps_duplicates():
    assert parse_student_emails(" a@x.com,, b@x.com ,a@x.com, ") == ["a@x.com", "b@x.com", "a@x.com"]
    assert parse_student_emails("") == []


def test_short_rows_read_as_blank(indices):
    intent = extract_course_intent(["Chemistry"], indices)
    assert intent.name == "Chemistry"
    assert intent.students == []


def test_cell_text_handles_absent_columns_and_numbers():
    assert cell_text(["a"], None) == ""
    assert cell_text(["a"], 3) == ""
    assert cell_text([9], 0) == "9"
    assert cell_text([None], 0) == ""


def test_empty_row_detection():
    assert is_empty_row([])
    assert is_empty_row(["", "", ""])
    assert not is_empty_row(["", "x"])


def test_description_keeps_values_verbatim():
    assert build_description("science", " 9") == "Subject: science\nYear Group:  9"


def test_lead_cell_is_trimmed(indices):
    intent = extract_course_intent(make_row(name="Art", lead="  lead@school.org \t"), indices)
    assert intent.teacher_email == "lead@school.org"
    whitespace_only = extract_course_intent(make_row(name="Art", lead="   "), indices)
    assert whitespace_only.teacher_email is None
