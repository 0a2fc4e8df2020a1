"""Build data store filters from a search term."""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from core.matcher import is_numeric_term
from models.student import StudentResult
from utils.arabic_normalizer import normalize_ar
from utils.arabic_patterns import (
    build_flexible_pattern,
    build_pattern,
    compile_pattern,
    escape_pattern,
    store_pattern,
)
from utils.name_variations import variations

logger = logging.getLogger(__name__)


def _name_conditions(trimmed: str) -> List[ColumnElement]:
    conditions: List[ColumnElement] = []
    for candidate in sorted(variations(trimmed)):
        pattern = build_flexible_pattern(candidate) or escape_pattern(candidate)
        if pattern and compile_pattern(pattern).matches_empty():
            # e.g. a lone alif: the optional class would match every row
            pattern = build_pattern(candidate)
        if not pattern:
            continue
        regex = store_pattern(pattern)
        conditions.append(StudentResult.student_name.regexp_match(regex))
        conditions.append(StudentResult.student_name_normalized.regexp_match(regex))
    return conditions


def build_search_filter(term: str) -> Optional[ColumnElement]:
    """
    Build a filter matching student results for a search term.

    Numeric terms only look at student_id, by literal containment of the raw
    term. Other terms match the raw and normalized term literally, plus the
    flexible pattern of every name variation.

    Args:
        term: Search term

    Returns:
        SQLAlchemy filter expression, or None for an empty term (no filtering)
    """
    trimmed = (term or "").strip() if isinstance(term, str) else ""
    if not trimmed:
        return None

    if is_numeric_term(trimmed):
        return StudentResult.student_id.contains(trimmed, autoescape=True)

    normalized = normalize_ar(trimmed)
    conditions: List[ColumnElement] = [
        StudentResult.student_id.contains(trimmed, autoescape=True),
        StudentResult.student_name.contains(trimmed, autoescape=True),
    ]
    if normalized:
        conditions.append(StudentResult.student_name_normalized.contains(normalized, autoescape=True))
        conditions.append(StudentResult.subject_normalized.contains(normalized, autoescape=True))

    try:
        conditions.extend(_name_conditions(trimmed))
    except Exception as e:
        logger.warning(f"Arabic name patterns failed for '{trimmed}', using literal search: {e}")

    return or_(*conditions)
