# result_sheet/services/result_ingest.py
import asyncio
import threading

from result_sheet.core.config import CONFIG, debug_root
from result_sheet.core.errors import NotFound
from result_sheet.core.logger import get_logger
from result_sheet.models.schemas import SemesterResult
from result_sheet.ocr.preprocess_image import normalize
from result_sheet.ocr.result_parser import parse
from result_sheet.services import ocr_service
from result_sheet.services.gpa import aggregate
from result_sheet.services.result_store import ResultStore
from result_sheet.utils.helpers import save_debug_image, save_debug_text, timestamped_dir

logger = get_logger("ingest")

# One aggregation pass at a time. Uploads are not blocked, so a sheet stored
# between the read and the writes of a pass is only picked up by the next pass.
_recalc_lock = threading.Lock()


async def submit_sheet(image_bytes: bytes, semester: int, year: int, store: ResultStore) -> dict:
    """
    Normalize -> OCR -> parse -> store.
    Parsing finishes for the whole sheet before anything is written.
    """
    bw = await asyncio.to_thread(normalize, image_bytes)
    text = await ocr_service.recognize(bw)
    logger.debug("OCR output:\n%s", text)

    if CONFIG.SAVE_DEBUG:
        debug_dir = timestamped_dir(debug_root(), f"sem{semester}_year{year}")
        save_debug_image(bw, f"{debug_dir}/01_normalized.png")
        save_debug_text(text, f"{debug_dir}/02_ocr_text.txt")

    results = parse(text, semester, year)
    created = store.insert_all(results)

    logger.info("Stored %d result rows (semester %d, year %d)", created, semester, year)
    return {"records_created": created}


def recalculate_all(store: ResultStore) -> dict:
    """Recompute year/final GPA for every student and write it onto all their rows."""
    with _recalc_lock:
        aggregates = aggregate(store.find_all())
        for index_no, agg in aggregates.items():
            store.update_many_by_index_no(index_no, agg)

    logger.info("Final GPA recalculated for %d students", len(aggregates))
    return {"students_updated": len(aggregates)}


def lookup_student(index_no: str, store: ResultStore) -> SemesterResult:
    result = store.find_latest(index_no)
    if result is None:
        raise NotFound(index_no)
    return result
