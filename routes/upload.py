"""Student results upload route."""
import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
import config
from core.ingestion import read_csv_rows
from data.handler import StudentDataHandler, get_data_handler
from models.schemas import UploadResponse

router = APIRouter()
logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".csv",)


@router.post("/upload", response_model=UploadResponse)
def upload_results(
    file: UploadFile = File(...),
    handler: StudentDataHandler = Depends(get_data_handler),
):
    """
    Import student results from a CSV file.

    The first row is the header; columns are matched by Arabic or English
    name and fall back to position (name, ID, subject, grade, semester, year).
    """
    filename = file.filename or ""
    if not filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload a CSV file (.csv)"
        )

    content = file.file.read()
    if len(content) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File size too large. Maximum {config.MAX_UPLOAD_BYTES // (1024 * 1024)}MB allowed."
        )

    try:
        count = handler.import_rows(read_csv_rows(content))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Uploaded {count} student records from '{filename}'")
    return UploadResponse(message=f"Successfully uploaded {count} student records", count=count)
