import cv2
import numpy as np
import pytest

from result_sheet.models.schemas import SemesterResult
from result_sheet.services import ocr_service
from result_sheet.services.result_store import InMemoryResultStore

SHEET_TEXT = """\
| IndexNo     | Name        | CO101 | CO102 | CO103 | CO104 | CO105 |
|-------------|-------------|-------|-------|-------|-------|-------|
| 20/COM/001  | Jane Doe    | A     | B+    | C     | A-    | F     |
| 20/COM/002  | John Smith  | A+    | A+    | A     | A     | A-    |
"""


def png_bytes(arr: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", arr)
    assert ok
    return buf.tobytes()


def make_result(index_no: str, year: int, gpa: float, semester: int = 1, name: str = "Student") -> SemesterResult:
    return SemesterResult(
        index_no=index_no,
        name=name,
        semester=semester,
        year=year,
        courses=[],
        semester_gpa=gpa,
    )


@pytest.fixture
def store():
    return InMemoryResultStore()


@pytest.fixture
def sheet_png():
    # content does not matter, OCR is faked
    img = np.full((40, 120), 255, dtype=np.uint8)
    img[10:30, 10:110] = 0
    return png_bytes(img)


@pytest.fixture
def fake_ocr(monkeypatch):
    """Replace tesseract; set `fake_ocr.text` to control the output."""

    class FakeOCR:
        text = SHEET_TEXT
        calls = 0

        async def __call__(self, image):
            FakeOCR.calls += 1
            return self.text

    fake = FakeOCR()
    monkeypatch.setattr(ocr_service, "recognize", fake)
    return fake
