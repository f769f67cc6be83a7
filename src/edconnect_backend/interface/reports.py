from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class AcademicRecord(BaseModel):
    subject_name: str = Field(min_length=1, max_length=255)
    average_score: float = Field(ge=0, le=10)
    absences: int = Field(ge=0)
    conduct: str = Field("", max_length=64)

class ReportUpdate(BaseModel):
    """
    Report as edited by a teacher.

    Records and comments replace the stored ones wholesale; scores, absences
    and conduct are taken as given. Student, term and year identify the
    report and are only needed when it is created; for an existing report
    they may be omitted but must match when sent.
    """
    student_id: Optional[str] = Field(None, min_length=1)
    term: Optional[str] = Field(None, min_length=1, max_length=64)
    year: Optional[int] = Field(None, ge=1900, le=9999)
    records: List[AcademicRecord] = Field(default_factory=list)
    teacher_comments: Optional[str] = None

class ReportGet(BaseModel):
    id: str
    student_id: str
    term: str
    year: int
    records: List[AcademicRecord]
    teacher_comments: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
