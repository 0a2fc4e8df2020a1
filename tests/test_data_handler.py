"""Tests for the student data handler."""
from unittest.mock import MagicMock
from sqlalchemy import event
import pytest
from data.handler import StudentDataHandler
from models.search_query import SearchQuery
from models.student import StudentResult


def test_import_counts_records(seeded_handler):
    assert seeded_handler.count() == 5


def test_import_rejects_empty_sheet(handler):
    with pytest.raises(ValueError):
        handler.import_rows([["الاسم"]])
    assert handler.count() == 0


def test_search_highlights_original_name(seeded_handler):
    results = seeded_handler.search("احمد")
    first = results[0]
    assert first['student_id'] == "1042"
    assert first['highlights']['student_name'] == "<mark>أحمد</mark> علي"


def test_search_results_are_confirmed_matches(seeded_handler):
    ids = [r['student_id'] for r in seeded_handler.search("فاطمه")]
    assert ids == ["3003"]


def test_numeric_search(seeded_handler):
    results = seeded_handler.search("104")
    assert [r['student_id'] for r in results] == ["1042"]
    assert results[0]['highlights']['student_id'] == "<mark>104</mark>2"


def test_numeric_search_without_match(seeded_handler):
    assert seeded_handler.search("10X") == []


def test_empty_search_returns_first_records(seeded_handler):
    results = seeded_handler.search("", limit=3)
    assert [r['student_id'] for r in results] == ["1042", "2001", "3003"]


def test_search_respects_limit(seeded_handler):
    assert len(seeded_handler.search("", limit=2)) == 2


def test_search_is_cached_until_import(seeded_handler, session_factory):
    assert seeded_handler.search("هدى") == []

    session = session_factory()
    session.add(StudentResult(student_name="هدى", student_name_normalized="هدى", student_id="6006"))
    session.commit()
    session.close()

    assert seeded_handler.search("هدى") == []

    seeded_handler.import_rows([["الاسم", "الرقم"], ["منى", "7007"]])
    assert [r['student_id'] for r in seeded_handler.search("هدى")] == ["6006"]


def test_log_search_query(handler, session_factory):
    assert handler.log_search_query("  علي ")
    assert not handler.log_search_query("   ")

    session = session_factory()
    terms = [q.term for q in session.query(SearchQuery).all()]
    session.close()
    assert terms == ["علي"]


def test_log_search_query_failure_is_not_raised():
    session = MagicMock()
    session.commit.side_effect = RuntimeError("database is locked")
    handler = StudentDataHandler(session_factory=lambda: session)

    assert handler.log_search_query("علي") is False
    session.rollback.assert_called_once()
    session.close.assert_called_once()


def test_empty_search_limits_the_query(seeded_handler, session_factory):
    engine = session_factory.kw['bind']
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        seeded_handler.search("", limit=2)
    finally:
        event.remove(engine, "before_cursor_execute", record)
    assert any("LIMIT" in s for s in statements)


def test_search_stops_confirming_at_limit(session_factory):
    handler = StudentDataHandler(session_factory=session_factory, batch_size=10)
    handler.import_rows([["الاسم", "الرقم"]] + [["سعد", str(i)] for i in range(300)])
    handler._confirmed = MagicMock(return_value=True)

    results = handler.search("سعد", limit=2)

    assert [r['student_id'] for r in results] == ["0", "1"]
    assert handler._confirmed.call_count == 2


def test_cached_results_are_copies(seeded_handler):
    results = seeded_handler.search("احمد")
    results[0]['highlights']['student_name'] = "changed"
    results.clear()

    again = seeded_handler.search("احمد")
    assert again[0]['highlights']['student_name'] == "<mark>أحمد</mark> علي"
