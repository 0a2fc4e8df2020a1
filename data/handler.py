"""Data handler for student results with match confirmation and caching."""
import copy
import logging
import threading
from typing import List, Dict, Any, Optional, Callable
from cachetools import TTLCache
from sqlalchemy.orm import Session
import config
from core.ingestion import parse_rows
from core.matcher import is_numeric_term, matches
from core.query_builder import build_search_filter
from models.search_query import SearchQuery
from models.student import SessionLocal, StudentResult
from utils.arabic_normalizer import normalize_for_search
from utils.highlighter import highlight

logger = logging.getLogger(__name__)

# Fields checked to confirm a match and highlighted in results
SEARCHABLE_FIELDS = ('student_name', 'student_id', 'subject')


class StudentDataHandler:
    """Searches and imports student results."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        cache_ttl: int = config.CACHE_TTL,
        batch_size: int = 100,
    ):
        """
        Initialize data handler.

        Args:
            session_factory: Callable returning a new database session
            cache_ttl: Seconds a search result stays cached
            batch_size: Rows fetched per round trip while confirming matches
        """
        self.session_factory = session_factory
        self.batch_size = batch_size
        self.cache = TTLCache(maxsize=256, ttl=cache_ttl)
        # Routes run in FastAPI's threadpool
        self._lock = threading.Lock()

    def _cache_key(self, term: str, limit: int) -> str:
        key = term if is_numeric_term(term) else normalize_for_search(term)
        return f"{key}|{limit}"

    def _confirmed(self, record: Dict[str, Any], term: str) -> bool:
        if is_numeric_term(term):
            return matches(record.get('student_id') or '', term)
        return any(matches(record.get(field) or '', term) for field in SEARCHABLE_FIELDS)

    def _with_highlights(self, record: Dict[str, Any], term: str) -> Dict[str, Any]:
        record['highlights'] = {
            field: highlight(record[field], term)
            for field in SEARCHABLE_FIELDS
            if record.get(field)
        }
        return record

    def search(self, term: Optional[str], limit: int = config.SEARCH_RESULT_LIMIT) -> List[Dict[str, Any]]:
        """
        Search student results.

        Args:
            term: Search term; empty returns the first records
            limit: Maximum number of results

        Returns:
            Matching records ordered by student ID, with highlighted fields
        """
        trimmed = (term or "").strip()
        cache_key = self._cache_key(trimmed, limit)
        with self._lock:
            cached = self.cache.get(cache_key)
        if cached is not None:
            return copy.deepcopy(cached)

        results = []
        scanned = 0
        db = self.session_factory()
        try:
            query = db.query(StudentResult).order_by(StudentResult.student_id, StudentResult.id)
            search_filter = build_search_filter(trimmed)
            if search_filter is None:
                rows = query.limit(limit)
            else:
                # Candidates are confirmed one by one, so stream them and stop at the limit
                rows = query.filter(search_filter).yield_per(self.batch_size)

            for row in rows:
                scanned += 1
                record = row.to_dict()
                if trimmed and not self._confirmed(record, trimmed):
                    continue
                results.append(self._with_highlights(record, trimmed))
                if len(results) >= limit:
                    break
        finally:
            db.close()

        logger.info(f"Search '{trimmed}' matched {len(results)} of {scanned} candidate rows")
        with self._lock:
            self.cache[cache_key] = results
        return copy.deepcopy(results)

    def log_search_query(self, term: str) -> bool:
        """
        Record a search term. Failures are logged, never raised.

        Returns:
            True if the term was stored
        """
        trimmed = (term or "").strip()
        if not trimmed:
            return False

        db = self.session_factory()
        try:
            db.add(SearchQuery(term=trimmed))
            db.commit()
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to log search query: {e}")
            return False
        finally:
            db.close()

    def import_rows(self, rows: List[List[Any]]) -> int:
        """
        Import a sheet (header row + data rows) of student results.

        Raises:
            ValueError: If the sheet has no valid records

        Returns:
            Number of records stored
        """
        records = parse_rows(rows)

        db = self.session_factory()
        try:
            db.add_all([StudentResult(**record) for record in records])
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        with self._lock:
            self.cache.clear()
        logger.info(f"Imported {len(records)} student records")
        return len(records)

    def count(self) -> int:
        """Number of stored student results."""
        db = self.session_factory()
        try:
            return db.query(StudentResult).count()
        finally:
            db.close()


# Global instance
data_handler = StudentDataHandler()


def get_data_handler() -> StudentDataHandler:
    """FastAPI dependency returning the shared data handler."""
    return data_handler
