# result_sheet/services/gpa.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from result_sheet.models.constants import FINAL_CLASS_FALLBACK, FINAL_CLASS_THRESHOLDS
from result_sheet.models.schemas import SemesterResult, StudentAggregate


def round2(value: float) -> float:
    # Half away from zero on the exact binary value, like JS toFixed(2).
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def classify(final_gpa: float) -> str:
    for lower_bound, label in FINAL_CLASS_THRESHOLDS:
        if final_gpa >= lower_bound:
            return label
    return FINAL_CLASS_FALLBACK


def group_by_student(records: Iterable[SemesterResult]) -> Dict[str, List[SemesterResult]]:
    students: Dict[str, List[SemesterResult]] = {}
    for rec in records:
        students.setdefault(rec.index_no, []).append(rec)
    return students


def student_aggregate(results: List[SemesterResult]) -> StudentAggregate:
    """
    Year GPA = mean semester GPA within the year (rounded).
    Final GPA = mean of the rounded year GPAs, so every year weighs the same
    regardless of how many semester rows it has.
    """
    by_year: Dict[int, List[float]] = {}
    for rec in results:
        by_year.setdefault(rec.year, []).append(rec.semester_gpa)

    year_gpa = {
        year: round2(sum(gpas) / len(gpas))
        for year, gpas in sorted(by_year.items())
    }
    final_gpa = round2(sum(year_gpa.values()) / len(year_gpa))

    return StudentAggregate(
        year_gpa=year_gpa,
        final_gpa=final_gpa,
        final_class=classify(final_gpa),
    )


def aggregate(records: Iterable[SemesterResult]) -> Dict[str, StudentAggregate]:
    """
    Aggregate every stored row into one StudentAggregate per index number.
    Students come out in order of first appearance.
    """
    return {
        index_no: student_aggregate(results)
        for index_no, results in group_by_student(records).items()
    }
