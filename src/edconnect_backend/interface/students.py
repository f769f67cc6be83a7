from datetime import date
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from edconnect_backend.interface.base import BaseEntityGet

def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError('Value cannot be empty or only whitespace')
    return value.strip()

NonBlankStr = Annotated[str, AfterValidator(_not_blank)]

class NewStudentPayload(BaseModel):
    """Student fields plus the contact details of the student's parent."""
    class_id: str = Field(min_length=1)
    student_name: NonBlankStr = Field(max_length=255)
    student_date_of_birth: date
    student_gender: NonBlankStr = Field(max_length=32)
    parent_name: NonBlankStr = Field(max_length=255)
    parent_email: EmailStr
    parent_phone: Optional[str] = Field(None, max_length=255)

class UpdateStudentPayload(BaseModel):
    name: NonBlankStr = Field(max_length=255)
    date_of_birth: date
    gender: NonBlankStr = Field(max_length=32)

class StudentGet(BaseEntityGet):
    id: str
    name: str
    date_of_birth: date
    gender: str
    avatar_url: Optional[str] = None
    parent_id: str
    classroom_id: str

class StudentCreated(BaseModel):
    student: StudentGet
    parent_created: bool = Field(description="Whether a new parent account was provisioned")

    model_config = ConfigDict(from_attributes=True)
