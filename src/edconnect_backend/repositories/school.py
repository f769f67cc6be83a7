"""
Repositories for the school structure: classrooms, subjects, teaching
assignments, students and timetables.
"""

from typing import List
from sqlalchemy.orm import Session

from .base import BaseRepository, DuplicateError
from ..model.auth import User
from ..model.enums import UserRole
from ..model.school import Classroom, Student, Subject, TeachingAssignment, TimetableEntry


class ClassroomRepository(BaseRepository[Classroom]):

    def __init__(self, db: Session):
        super().__init__(db, Classroom)

    def create(self, entity: Classroom) -> Classroom:
        self.require_reference(User, entity.homeroom_teacher_id, role=UserRole.TEACHER)
        return super().create(entity)


class SubjectRepository(BaseRepository[Subject]):

    def __init__(self, db: Session):
        super().__init__(db, Subject)


class TeachingAssignmentRepository(BaseRepository[TeachingAssignment]):

    def __init__(self, db: Session):
        super().__init__(db, TeachingAssignment)

    def create(self, entity: TeachingAssignment) -> TeachingAssignment:
        self.require_reference(User, entity.teacher_id, role=UserRole.TEACHER)
        self.require_reference(Classroom, entity.classroom_id)
        self.require_reference(Subject, entity.subject_id)
        duplicate = self.find_one_by(
            teacher_id=entity.teacher_id,
            classroom_id=entity.classroom_id,
            subject_id=entity.subject_id,
        )
        if duplicate is not None:
            raise DuplicateError("TeachingAssignment", {
                "teacher_id": entity.teacher_id,
                "classroom_id": entity.classroom_id,
                "subject_id": entity.subject_id,
            })
        return super().create(entity)


class StudentRepository(BaseRepository[Student]):
    """Students always reference a parent user and an existing classroom."""

    def __init__(self, db: Session):
        super().__init__(db, Student)

    def create(self, entity: Student) -> Student:
        self.require_reference(Classroom, entity.classroom_id)
        self.require_reference(User, entity.parent_id, role=UserRole.PARENT)
        return super().create(entity)

    def find_by_classroom(self, classroom_id: str) -> List[Student]:
        return self.list(order_by=[Student.name, Student.id], classroom_id=classroom_id)

    def find_by_parent(self, parent_id: str) -> List[Student]:
        return self.list(order_by=[Student.name, Student.id], parent_id=parent_id)


class TimetableRepository(BaseRepository[TimetableEntry]):

    def __init__(self, db: Session):
        super().__init__(db, TimetableEntry)

    def create(self, entity: TimetableEntry) -> TimetableEntry:
        self.require_reference(Classroom, entity.classroom_id)
        return super().create(entity)

    def find_by_classroom(self, classroom_id: str) -> List[TimetableEntry]:
        return self.list(
            order_by=[TimetableEntry.day_of_week, TimetableEntry.period],
            classroom_id=classroom_id,
        )
