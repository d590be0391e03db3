# result_sheet/ocr/result_parser.py
"""
Turns raw OCR text of a result sheet into SemesterResult rows.

Expected layout (columns separated by at least two spaces, which tesseract
keeps with preserve_interword_spaces=1):

    IndexNo     Name        CO101  CO102  CO103  CO104  CO105
    20/COM/001  Jane Doe    A      B+     C      A-     F

The whole sheet is rejected on the first unknown grade: once a column drifts
the following rows are misaligned as well.
"""
from __future__ import annotations

import re
from typing import List

from result_sheet.core.errors import ParseError
from result_sheet.core.logger import get_logger
from result_sheet.models.constants import (
    COURSES_PER_ROW,
    CREDIT_HOURS_CHAR_INDEX,
    DEFAULT_CREDIT_HOURS,
    FIRST_COURSE_COLUMN,
    GRADE_POINTS,
    INDEX_COLUMN,
    MIN_ROW_COLUMNS,
    NAME_COLUMN,
)
from result_sheet.models.schemas import CourseEntry, SemesterResult

logger = get_logger("parser")

COLUMN_GAP_RX = re.compile(r"\s{2,}")
SEPARATOR_RX = re.compile(r"-[-\s]*")


# ============================================================
# GRADES / COURSES
# ============================================================

def grade_point_value(grade: str, name: str | None = None) -> float:
    try:
        return GRADE_POINTS[grade]
    except KeyError:
        owner = f" for {name}" if name is not None else ""
        raise ParseError(f"invalid grade '{grade}'{owner}") from None


def fallback_course_code(year: int, semester: int, column: int) -> str:
    # Used when the header has fewer course labels than the row has grades.
    # Format kept as found on existing sheets; the doubled column index is unexplained.
    return f"CO{year}{semester}{column}{column}"


def credit_hours_for(code: str) -> int:
    """
    Credit hours are encoded as the 4th character of the course code
    (e.g. "CSC3012" -> 3). Missing, non-digit or zero -> DEFAULT_CREDIT_HOURS.
    """
    if len(code) > CREDIT_HOURS_CHAR_INDEX:
        ch = code[CREDIT_HOURS_CHAR_INDEX]
        if ch in "123456789":
            return int(ch)
    return DEFAULT_CREDIT_HOURS


# ============================================================
# TEXT CLEANUP
# ============================================================

def clean_lines(raw_text: str) -> List[str]:
    """Drops table borders, blank lines and dash separator lines."""
    lines = []
    for line in (raw_text or "").split("\n"):
        line = line.replace("|", "").strip()
        if not line or SEPARATOR_RX.fullmatch(line):
            continue
        lines.append(line)
    return lines


def split_columns(line: str) -> List[str]:
    return [col.strip() for col in COLUMN_GAP_RX.split(line) if col.strip()]


# ============================================================
# MAIN API
# ============================================================

def _parse_row(
    columns: List[str],
    headers: List[str],
    semester: int,
    year: int,
) -> SemesterResult:
    index_no = columns[INDEX_COLUMN].strip()
    name = columns[NAME_COLUMN].strip()

    courses: List[CourseEntry] = []
    total_quality_points = 0.0
    total_credit_hours = 0

    for j in range(FIRST_COURSE_COLUMN, FIRST_COURSE_COLUMN + COURSES_PER_ROW):
        code = headers[j] if j < len(headers) else fallback_course_code(year, semester, j)
        grade = columns[j].strip().upper()

        credit_hours = credit_hours_for(code)
        quality_points = grade_point_value(grade, name) * credit_hours

        courses.append(CourseEntry(
            code=code,
            grade=grade,
            credit_hours=credit_hours,
            quality_points=quality_points,
        ))
        total_quality_points += quality_points
        total_credit_hours += credit_hours

    return SemesterResult(
        index_no=index_no,
        name=name,
        semester=semester,
        year=year,
        courses=courses,
        semester_gpa=total_quality_points / total_credit_hours,
    )


def parse(raw_text: str, semester: int, year: int) -> List[SemesterResult]:
    """
    Parse a whole sheet. Returns every valid row in order, or raises
    ParseError without returning anything.

    Rows with fewer than 7 columns are treated as OCR noise and skipped, so a
    sheet with a header and only noise yields an empty list.
    """
    lines = clean_lines(raw_text)
    if len(lines) < 2:
        raise ParseError("insufficient data extracted from image")

    headers = split_columns(lines[0])
    results: List[SemesterResult] = []

    for line_no, line in enumerate(lines[1:], start=1):
        columns = split_columns(line)
        if len(columns) < MIN_ROW_COLUMNS:
            logger.debug("Skipping line %d (%d columns): %r", line_no, len(columns), line)
            continue
        results.append(_parse_row(columns, headers, semester, year))

    return results
