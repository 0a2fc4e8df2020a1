"""Structured search logging."""
import uuid
import json
import logging
from typing import Dict, Any
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def log_search(
    request_id: str,
    term: str,
    total_results: int,
    is_numeric: bool,
    metadata: Dict[str, Any] = None
):
    """
    Log a search with structured data.

    Args:
        request_id: Unique request ID
        term: Search term
        total_results: Number of results returned
        is_numeric: Whether the term was treated as a student ID
        metadata: Additional metadata
    """
    log_data = {
        "request_id": request_id,
        "term": term,
        "total_results": total_results,
        "is_numeric": is_numeric,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if metadata:
        log_data["metadata"] = metadata

    logger.info(json.dumps(log_data, ensure_ascii=False))


def generate_request_id() -> str:
    """Generate unique request ID."""
    return str(uuid.uuid4())
