# result_sheet/ocr/preprocess_image.py
import cv2
import numpy as np

from result_sheet.core.config import CONFIG
from result_sheet.core.errors import ImageError


# ============================================================
# MAIN ENTRY
# ============================================================

def normalize(image_bytes: bytes, threshold: int | None = None) -> np.ndarray:
    """
    Turns an uploaded image into a two-level (0/255) bitmap for OCR:
    grayscale -> contrast stretch -> fixed threshold.
    Pixels at or above the threshold become white.
    """
    if threshold is None:
        threshold = CONFIG.BINARY_THRESHOLD

    bgr = decode_image(image_bytes)

    # ---- Step 1: grayscale ----
    gray = cv2.cvtColor(bgr, cv2.COLOR_BGR2GRAY)

    # ---- Step 2: stretch intensities to the full 0..255 range ----
    gray = _normalize_contrast(gray)

    # ---- Step 3: binarize ----
    # THRESH_BINARY keeps values strictly above `thresh`
    _, bw = cv2.threshold(gray, threshold - 1, 255, cv2.THRESH_BINARY)
    return bw


# ============================================================
# HELPERS
# ============================================================

def decode_image(image_bytes: bytes) -> np.ndarray:
    if not image_bytes:
        raise ImageError("empty image")

    img_array = np.frombuffer(image_bytes, np.uint8)
    try:
        img = cv2.imdecode(img_array, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ImageError(f"failed to decode image: {e}") from e

    if img is None:
        raise ImageError("failed to decode image bytes")
    return img


def _normalize_contrast(gray: np.ndarray) -> np.ndarray:
    # 1st..99th percentile -> 0..255, so stray specks or borders do not pin the range
    lo, hi = np.percentile(gray, (1, 99))
    if hi <= lo:
        # flat image, nothing to stretch
        return gray.copy()
    g = (gray.astype(np.float32) - lo) * (255.0 / (hi - lo))
    return np.clip(np.rint(g), 0, 255).astype(np.uint8)
