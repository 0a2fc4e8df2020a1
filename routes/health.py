"""Health check routes."""
from fastapi import APIRouter, Depends, HTTPException
from data.handler import StudentDataHandler, get_data_handler

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok", "service": "student-records-search"}


@router.get("/health/db")
def health_db(handler: StudentDataHandler = Depends(get_data_handler)):
    """Check database connection."""
    try:
        count = handler.count()
        return {
            "status": "ok",
            "database": "connected",
            "students_count": count
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Database error: {str(e)}")
