"""Tests for student record import."""
import pytest
from core.ingestion import (
    FIELD_POSITIONS,
    build_student_record,
    normalize_grade,
    parse_rows,
    read_csv_rows,
    resolve_columns,
)


def test_parse_arabic_headers(sample_sheet):
    records = parse_rows(sample_sheet)
    assert len(records) == 5

    first = records[0]
    assert first['student_name'] == "أحمد علي"
    assert first['student_name_normalized'] == "احمد علي"
    assert first['student_id'] == "1042"
    assert first['subject'] == "رياضيات"
    assert first['grade'] == 95.0
    assert first['semester'] == "الأول"
    assert first['year'] == "2024"

    assert records[1]['grade'] == 80.0  # Arabic-Indic digits
    assert records[3]['student_name_normalized'] == "محمد سعيد"


def test_english_headers_in_any_order():
    records = parse_rows([
        ["Student ID", "Student Name", "Grade"],
        ["7", "Sara", "88"],
    ])
    assert records == [{
        'student_name': "Sara",
        'student_name_normalized': "sara",
        'student_id': "7",
        'subject': None,
        'subject_normalized': None,
        'grade': 88.0,
        'semester': None,
        'year': None,
    }]


def test_unknown_headers_use_positions():
    assert resolve_columns(["a", "b", "c"]) == FIELD_POSITIONS
    records = parse_rows([["a", "b", "c"], ["منى", "9", "تاريخ"]])
    assert records[0]['student_name'] == "منى"
    assert records[0]['student_id'] == "9"
    assert records[0]['subject'] == "تاريخ"


def test_rows_without_name_are_skipped():
    records = parse_rows([
        ["الاسم", "الرقم"],
        ["", "1"],
        [],
        ["هدى", "2"],
    ])
    assert [r['student_name'] for r in records] == ["هدى"]


def test_numeric_cells_become_text():
    columns = resolve_columns(["الاسم", "الرقم"])
    record = build_student_record(columns, ["هدى", 1042.0])
    assert record['student_id'] == "1042"


@pytest.mark.parametrize("rows", [
    [],
    [["الاسم", "الرقم"]],
    [["الاسم", "الرقم"], ["", "1"]],
])
def test_invalid_sheets_raise(rows):
    with pytest.raises(ValueError):
        parse_rows(rows)


def test_missing_name_column_raises():
    with pytest.raises(ValueError):
        parse_rows([["Grade", "Year"], ["90", "2024"]])


@pytest.mark.parametrize("value,expected", [
    ("95", 95.0),
    (70, 70.0),
    ("٨٠", 80.0),
    ("", None),
    (None, None),
    ("abc", None),
    ("150", None),
    ("-1", None),
])
def test_normalize_grade(value, expected):
    assert normalize_grade(value) == expected


def test_read_csv_rows_strips_bom_and_blank_lines():
    content = "\ufeffالاسم,الرقم\nأحمد,1\n,\n".encode("utf-8")
    assert read_csv_rows(content) == [["الاسم", "الرقم"], ["أحمد", "1"]]


def test_read_csv_rows_rejects_binary():
    with pytest.raises(ValueError):
        read_csv_rows(b"\xff\xfe\x00\x01")
