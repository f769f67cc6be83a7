from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class TimetableEntryGet(BaseModel):
    day_of_week: int = Field(ge=2, le=7, description="2 is Monday")
    period: int = Field(ge=1)
    subject_name: str

    model_config = ConfigDict(from_attributes=True)

class TimetableGet(BaseModel):
    student_id: Optional[str] = None
    student_name: Optional[str] = None
    class_id: str
    class_name: str
    entries: List[TimetableEntryGet]
