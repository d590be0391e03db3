# result_sheet/models/schemas.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    grade: str
    credit_hours: int = Field(ge=1)
    quality_points: float = Field(ge=0)


class StudentAggregate(BaseModel):
    year_gpa: Dict[int, float]
    final_gpa: float
    final_class: str


class SemesterResult(BaseModel):
    """One extracted row of a result sheet, plus aggregate fields once calculated."""
    index_no: str
    name: str
    semester: int = Field(ge=1, le=2)
    year: int = Field(ge=1, le=3)
    courses: List[CourseEntry]
    semester_gpa: float

    # filled in by the GPA recalculation
    year_gpa: Optional[Dict[int, float]] = None
    final_gpa: Optional[float] = None
    final_class: Optional[str] = None


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    count: int


class RecalculateResponse(BaseModel):
    success: bool = True
    message: str
    students_updated: int


class StudentLookupResponse(BaseModel):
    success: bool = True
    data: SemesterResult
