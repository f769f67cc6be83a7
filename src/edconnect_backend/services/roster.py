"""
Classroom listings and roster changes.

Adding a student may provision the parent's account as a side effect: the
parent is looked up by email (ignoring case) and only created when no user
holds that address yet. Parent and student are written in one transaction.
"""

import logging
from typing import List
from sqlalchemy.orm import Session

from edconnect_backend.interface.classrooms import ClassroomGet
from edconnect_backend.interface.students import (
    NewStudentPayload,
    StudentCreated,
    StudentGet,
    UpdateStudentPayload,
)
from edconnect_backend.model.enums import UserRole
from edconnect_backend.model.school import Student
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.core import require_permission, visible_records
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.repositories.base import ConstraintViolationError
from edconnect_backend.repositories.school import StudentRepository
from edconnect_backend.repositories.users import UserRepository
from edconnect_backend.services.base import unit_of_work

logger = logging.getLogger(__name__)


def list_classes(principal: Principal, db: Session) -> List[ClassroomGet]:
    """Classrooms the teacher leads or teaches, labelled with their roles."""
    assignments = visible_records(principal, Action.VIEW_CLASSES_OWNED, db)
    return [
        ClassroomGet(
            id=entry.classroom.id,
            name=entry.classroom.name,
            homeroom_teacher_id=entry.classroom.homeroom_teacher_id,
            teacher_role=entry.role_label,
        )
        for entry in assignments
    ]


def list_students_of_class(principal: Principal, class_id: str, db: Session) -> List[StudentGet]:
    require_permission(principal, Action.VIEW_STUDENTS_OF_CLASS, class_id, db)
    return [StudentGet.model_validate(s) for s in StudentRepository(db).find_by_classroom(class_id)]


def get_student(principal: Principal, student_id: str, db: Session) -> StudentGet:
    require_permission(principal, Action.VIEW_STUDENT, student_id, db)
    return StudentGet.model_validate(StudentRepository(db).get_by_id(student_id))


def list_children(principal: Principal, db: Session) -> List[StudentGet]:
    children = visible_records(principal, Action.VIEW_CHILDREN, db)
    return [StudentGet.model_validate(s) for s in children]


def add_student(principal: Principal, payload: NewStudentPayload, db: Session) -> StudentCreated:
    with unit_of_work(db):
        require_permission(principal, Action.ADD_STUDENT, payload.class_id, db)

        parent, parent_created = UserRepository(db).get_or_create_parent(
            display_name=payload.parent_name,
            email=payload.parent_email,
            phone=payload.parent_phone,
        )
        if parent.role is not UserRole.PARENT:
            raise ConstraintViolationError(
                f"Email {payload.parent_email} belongs to a {parent.role.value.lower()} account"
            )

        student = StudentRepository(db).create(Student(
            name=payload.student_name,
            date_of_birth=payload.student_date_of_birth,
            gender=payload.student_gender,
            parent_id=parent.id,
            classroom_id=payload.class_id,
        ))
        result = StudentCreated(student=StudentGet.model_validate(student), parent_created=parent_created)

    if parent_created:
        logger.info(f"Provisioned parent {result.student.parent_id} for student {result.student.id}")
    logger.info(f"Teacher {principal.user_id} added student {result.student.id} to class {payload.class_id}")
    return result


def update_student(principal: Principal, student_id: str, payload: UpdateStudentPayload, db: Session) -> StudentGet:
    with unit_of_work(db):
        require_permission(principal, Action.EDIT_STUDENT, student_id, db)
        student = StudentRepository(db).update(student_id, {
            "name": payload.name,
            "date_of_birth": payload.date_of_birth,
            "gender": payload.gender,
        })
        result = StudentGet.model_validate(student)

    logger.info(f"Teacher {principal.user_id} updated student {student_id}")
    return result


def delete_student(principal: Principal, student_id: str, db: Session) -> None:
    """Remove a student along with their reports and invoices."""
    with unit_of_work(db):
        require_permission(principal, Action.DELETE_STUDENT, student_id, db)
        StudentRepository(db).delete(student_id)

    logger.info(f"Teacher {principal.user_id} deleted student {student_id}")
