# result_sheet/services/ocr_service.py
import asyncio

import numpy as np
import pytesseract

from result_sheet.core.config import CONFIG
from result_sheet.core.errors import RecognitionError
from result_sheet.models.constants import OCR_CHAR_WHITELIST

if CONFIG.TESSERACT_CMD:
    pytesseract.pytesseract.tesseract_cmd = CONFIG.TESSERACT_CMD


def tesseract_config(page_seg_mode: int | None = None) -> str:
    """
    psm 6 = single uniform block of text, which keeps table rows on one line.
    Interword spaces are preserved so the parser can split on column gaps.
    """
    if page_seg_mode is None:
        page_seg_mode = CONFIG.OCR_PAGE_SEG_MODE
    return (
        f"--psm {page_seg_mode} "
        f"-c preserve_interword_spaces=1 "
        f'-c "tessedit_char_whitelist={OCR_CHAR_WHITELIST}"'
    )


def recognize_sync(image: np.ndarray) -> str:
    try:
        return pytesseract.image_to_string(
            image,
            lang=CONFIG.OCR_LANG,
            config=tesseract_config(),
        )
    except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
        raise RecognitionError(f"tesseract failed: {e}") from e


async def recognize(image: np.ndarray) -> str:
    """Run tesseract in a worker thread; no timeout is applied here."""
    return await asyncio.to_thread(recognize_sync, image)
