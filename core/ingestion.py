"""Bulk student record import with header mapping and normalization."""
import csv
import io
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from utils.arabic_normalizer import normalize_ar

logger = logging.getLogger(__name__)


# Accepted header names per field; position is the fallback column index
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    'student_name': ('اسم الطالب', 'الاسم', 'Student Name'),
    'student_id': ('رقم الطالب', 'الرقم', 'رقم الجلوس', 'Student ID', 'seating_no'),
    'subject': ('المادة', 'Subject'),
    'grade': ('الدرجة', 'Grade'),
    'semester': ('الفصل', 'Semester'),
    'year': ('السنة', 'Year'),
}
FIELD_POSITIONS = {
    'student_name': 0,
    'student_id': 1,
    'subject': 2,
    'grade': 3,
    'semester': 4,
    'year': 5,
}


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(value: Any) -> Optional[str]:
    """Trimmed string value, or None when empty."""
    if _is_empty(value):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def normalize_grade(value: Any) -> Optional[float]:
    """Parse a grade in [0, 100]; anything else is None."""
    text = _text(value)
    if text is None:
        return None
    try:
        grade = float(normalize_ar(text))
    except ValueError:
        logger.debug(f"Ignoring non-numeric grade: {value!r}")
        return None
    if not 0 <= grade <= 100:
        logger.debug(f"Ignoring out-of-range grade: {grade}")
        return None
    return grade


def resolve_columns(headers: Sequence[str]) -> Dict[str, Optional[int]]:
    """
    Find the column index of each field.

    Headers are matched by alias; when no header is recognized at all the
    fixed column positions are used instead.
    """
    header_index = {str(h).strip(): i for i, h in enumerate(headers) if not _is_empty(h)}
    columns: Dict[str, Optional[int]] = {}
    for field, aliases in FIELD_ALIASES.items():
        columns[field] = next((header_index[a] for a in aliases if a in header_index), None)

    if all(index is None for index in columns.values()):
        logger.info("No known headers found, using column positions")
        return dict(FIELD_POSITIONS)
    return columns


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def build_student_record(columns: Dict[str, Optional[int]], row: Sequence[Any]) -> Optional[Dict[str, Any]]:
    """
    Map one data row to a student record.

    Args:
        columns: Field to column index, from resolve_columns
        row: Data row

    Returns:
        Record dict with normalized name/subject, or None for rows without a name
    """
    name = _text(_cell(row, columns['student_name']))
    if not name:
        return None

    subject = _text(_cell(row, columns['subject']))
    return {
        'student_name': name,
        'student_name_normalized': normalize_ar(name),
        'student_id': _text(_cell(row, columns['student_id'])),
        'subject': subject,
        'subject_normalized': normalize_ar(subject) if subject else None,
        'grade': normalize_grade(_cell(row, columns['grade'])),
        'semester': _text(_cell(row, columns['semester'])),
        'year': _text(_cell(row, columns['year'])),
    }


def parse_rows(rows: List[Sequence[Any]]) -> List[Dict[str, Any]]:
    """
    Turn a sheet (header row + data rows) into student records.

    Raises:
        ValueError: If there is no data row or no row yields a record
    """
    if len(rows) < 2:
        raise ValueError("File must contain at least a header row and one data row")

    columns = resolve_columns([str(h).strip() if h is not None else "" for h in rows[0]])
    if columns['student_name'] is None:
        raise ValueError("No student name column found")

    records = []
    for row in rows[1:]:
        record = build_student_record(columns, row)
        if record:
            records.append(record)

    if not records:
        raise ValueError("No valid student data found in the file")

    logger.info(f"Parsed {len(records)} student records from {len(rows) - 1} rows")
    return records


def read_csv_rows(content: bytes) -> List[List[str]]:
    """
    Decode CSV bytes into rows.

    Raises:
        ValueError: If the content is not UTF-8 text
    """
    try:
        text = content.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ValueError(f"File is not valid UTF-8 text: {e}")
    return [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
