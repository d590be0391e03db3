# result_sheet/routes/result_routes.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from result_sheet.core.config import CONFIG
from result_sheet.core.database import get_results_collection
from result_sheet.core.errors import ImageError, NotFound, ParseError, RecognitionError
from result_sheet.core.logger import get_logger
from result_sheet.models.schemas import RecalculateResponse, StudentLookupResponse, UploadResponse
from result_sheet.services.result_ingest import lookup_student, recalculate_all, submit_sheet
from result_sheet.services.result_store import MongoResultStore, ResultStore

logger = get_logger("routes")

router = APIRouter(prefix="/api", tags=["Results"])


def get_result_store() -> ResultStore:
    return MongoResultStore(get_results_collection())


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content = {"success": False, "error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@router.post("/upload", response_model=UploadResponse)
async def upload_result_sheet(
    result_sheet: Optional[UploadFile] = File(None, alias="resultSheet"),
    semester: int = Form(..., ge=1, le=2),
    year: int = Form(..., ge=1, le=3),
    store: ResultStore = Depends(get_result_store),
):
    """
    Upload one scanned result sheet. Either every row on the sheet is stored
    or none is.
    """
    if result_sheet is None:
        return _error(400, "No file uploaded")

    if not (result_sheet.content_type or "").startswith("image/"):
        return _error(400, "Only image files are allowed!")

    content = await result_sheet.read()
    if len(content) > CONFIG.MAX_UPLOAD_BYTES:
        return _error(413, "File too large", f"limit is {CONFIG.MAX_UPLOAD_BYTES} bytes")

    try:
        out = await submit_sheet(content, semester, year, store)
    except ImageError as e:
        logger.warning("Upload rejected, bad image: %s", e)
        return _error(400, "Result processing failed", str(e))
    except ParseError as e:
        logger.warning("Upload rejected, parse failed: %s", e)
        return _error(422, "Result processing failed", str(e))
    except RecognitionError as e:
        logger.error("OCR engine failure: %s", e)
        return _error(502, "Result processing failed", str(e))

    return UploadResponse(
        message="Results processed successfully",
        count=out["records_created"],
    )


@router.post("/calculate-final", response_model=RecalculateResponse)
def calculate_final(store: ResultStore = Depends(get_result_store)):
    out = recalculate_all(store)
    return RecalculateResponse(
        message="Final GPA calculated for all students",
        students_updated=out["students_updated"],
    )


@router.get("/student/{index_no:path}", response_model=StudentLookupResponse)
def get_student_result(index_no: str, store: ResultStore = Depends(get_result_store)):
    """Latest stored result row for the index number (index numbers contain '/')."""
    try:
        result = lookup_student(index_no, store)
    except NotFound:
        return _error(404, "Student not found")
    return StudentLookupResponse(data=result)
