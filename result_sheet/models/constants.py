# result_sheet/models/constants.py
from types import MappingProxyType

# Grade -> grade point value. Read-only; anything not listed here is rejected.
GRADE_POINTS = MappingProxyType({
    "A+": 4.0, "A": 3.7, "A-": 3.3,
    "B+": 3.0, "B": 2.7, "B-": 2.3,
    "C+": 2.0, "C": 1.7, "C-": 1.3,
    "F": 0.0,
})

# Result sheet layout: index no, name, then one column per course
INDEX_COLUMN = 0
NAME_COLUMN = 1
FIRST_COURSE_COLUMN = 2
COURSES_PER_ROW = 5
MIN_ROW_COLUMNS = FIRST_COURSE_COLUMN + COURSES_PER_ROW

# Credit hours are read from this character of the course code
CREDIT_HOURS_CHAR_INDEX = 3
DEFAULT_CREDIT_HOURS = 2

# Final classification, checked top to bottom on the rounded final GPA
FINAL_CLASS_THRESHOLDS = (
    (3.7, "First Class"),
    (3.3, "Second Upper Class"),
    (3.0, "Second Lower Class"),
)
FINAL_CLASS_FALLBACK = "Just Pass"

# Tesseract character whitelist tuned for result tables
OCR_CHAR_WHITELIST = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ/.+-| "
