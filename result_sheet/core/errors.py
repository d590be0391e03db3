# result_sheet/core/errors.py
"""
Failures raised by the result-sheet pipeline.

None of these are retried inside the package; the HTTP layer (or whoever
calls the services) decides what to tell the user.
"""


class ResultSheetError(Exception):
    """Base class for every pipeline failure."""


class ImageError(ResultSheetError):
    """The uploaded bytes are empty or cannot be decoded as an image."""


class RecognitionError(ResultSheetError):
    """The OCR engine could not be run on the normalized image."""


class ParseError(ResultSheetError):
    """The OCR text is too short or holds a grade outside the grade table."""


class NotFound(ResultSheetError):
    """No stored result for the requested index number."""

    def __init__(self, index_no: str):
        super().__init__(f"no result stored for index number '{index_no}'")
        self.index_no = index_no
