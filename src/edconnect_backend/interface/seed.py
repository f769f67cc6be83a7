"""
Seed file format.

A seed file describes a whole school: accounts, classrooms, subjects and the
records hanging off students. Every entry carries a stable id so that seeding
the same file twice leaves the database unchanged.
"""

from datetime import date
from typing import List, Optional
import yaml
from pydantic import BaseModel, Field

from edconnect_backend.interface.invoices import FeeItem
from edconnect_backend.interface.reports import AcademicRecord
from edconnect_backend.model.enums import UserRole

class UserSeed(BaseModel):
    id: str
    display_name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    gender: Optional[str] = None

class SubjectSeed(BaseModel):
    id: str
    name: str

class ClassroomSeed(BaseModel):
    id: str
    name: str
    homeroom_teacher_id: str

class TeachingAssignmentSeed(BaseModel):
    teacher_id: str
    class_id: str
    subject_id: str

class StudentSeed(BaseModel):
    id: str
    name: str
    date_of_birth: date
    gender: str
    parent_id: str
    class_id: str

class TimetableSeed(BaseModel):
    class_id: str
    day_of_week: int = Field(ge=2, le=7)
    period: int = Field(ge=1)
    subject_name: str

class ReportSeed(BaseModel):
    id: str
    student_id: str
    term: str
    year: int
    records: List[AcademicRecord] = Field(default_factory=list)
    teacher_comments: Optional[str] = None

class InvoiceSeed(BaseModel):
    id: str
    student_id: str
    month: int = Field(ge=1, le=12)
    year: int
    items: List[FeeItem] = Field(default_factory=list)
    is_paid: bool = False

class AnnouncementSeed(BaseModel):
    id: str
    content: str
    created_by: Optional[str] = None

class SessionSeed(BaseModel):
    token: str
    user_id: str

class SchoolSeed(BaseModel):
    users: List[UserSeed] = Field(default_factory=list)
    subjects: List[SubjectSeed] = Field(default_factory=list)
    classes: List[ClassroomSeed] = Field(default_factory=list)
    teaching_assignments: List[TeachingAssignmentSeed] = Field(default_factory=list)
    students: List[StudentSeed] = Field(default_factory=list)
    timetable: List[TimetableSeed] = Field(default_factory=list)
    reports: List[ReportSeed] = Field(default_factory=list)
    invoices: List[InvoiceSeed] = Field(default_factory=list)
    announcements: List[AnnouncementSeed] = Field(default_factory=list)
    sessions: List[SessionSeed] = Field(default_factory=list)

    @staticmethod
    def read_seed_from_string(yamlstring: str) -> "SchoolSeed":
        return SchoolSeed(**(yaml.safe_load(yamlstring) or {}))

    @staticmethod
    def read_seed_from_file(filename: str) -> "SchoolSeed":
        with open(filename, "r", encoding="utf-8") as file:
            return SchoolSeed(**(yaml.safe_load(file) or {}))
