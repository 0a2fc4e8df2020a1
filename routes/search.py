"""Student search routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
import config
from core.matcher import is_numeric_term
from data.handler import StudentDataHandler, get_data_handler
from middleware.logging import generate_request_id, log_search
from models.schemas import SearchInfo, SearchLogRequest, SearchResponse, StudentRecord

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/search", response_model=SearchResponse)
def search_students(
    q: Optional[str] = Query(None, description="Student name, subject or student ID"),
    limit: int = Query(config.SEARCH_RESULT_LIMIT, ge=1, le=200),
    handler: StudentDataHandler = Depends(get_data_handler),
):
    """
    Search student results.

    Args:
        q: Search term (digits only searches student IDs)
        limit: Maximum number of results

    Returns:
        Matching records with highlighted fields
    """
    term = (q or "").strip()
    if term:
        handler.log_search_query(term)

    results = handler.search(term, limit=limit)
    is_numeric = is_numeric_term(term)
    log_search(generate_request_id(), term, len(results), is_numeric)

    return SearchResponse(
        results=[StudentRecord(**r) for r in results],
        search_info=SearchInfo(
            query=term or None,
            total_results=len(results),
            is_numeric_search=is_numeric,
        ),
    )


@router.post("/log-search")
def log_search_term(
    request: SearchLogRequest,
    handler: StudentDataHandler = Depends(get_data_handler),
):
    """Record a search term submitted by the client."""
    stored = handler.log_search_query(request.term)
    return {"success": stored}
