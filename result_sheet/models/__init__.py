# result_sheet/models/__init__.py

from .schemas import CourseEntry, SemesterResult, StudentAggregate

__all__ = [
    "CourseEntry",
    "SemesterResult",
    "StudentAggregate",
]
