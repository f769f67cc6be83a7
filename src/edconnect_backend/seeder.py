"""
Loads a school seed into the database through the repositories, so seeded
data passes the same reference and invoice checks as live writes.
"""

import logging
from sqlalchemy.orm import Session

from edconnect_backend.interface.seed import SchoolSeed
from edconnect_backend.model.academics import Invoice, Report
from edconnect_backend.model.auth import User
from edconnect_backend.model.message import Announcement
from edconnect_backend.model.school import Classroom, Student, Subject, TeachingAssignment, TimetableEntry
from edconnect_backend.permissions.auth import session_provider
from edconnect_backend.repositories.communication import AnnouncementRepository
from edconnect_backend.repositories.records import InvoiceRepository, ReportRepository
from edconnect_backend.repositories.school import (
    ClassroomRepository,
    StudentRepository,
    SubjectRepository,
    TeachingAssignmentRepository,
    TimetableRepository,
)
from edconnect_backend.repositories.users import UserRepository
from edconnect_backend.services.base import unit_of_work
from edconnect_backend.settings import settings

logger = logging.getLogger(__name__)


def seed_database(db: Session, seed: SchoolSeed) -> int:
    """
    Insert every seed entry whose id is not stored yet.

    Returns:
        Number of rows created
    """
    created = 0

    with unit_of_work(db):
        users = UserRepository(db)
        for entry in seed.users:
            if not users.exists(entry.id):
                users.create(User(**entry.model_dump()))
                created += 1

        subjects = SubjectRepository(db)
        for entry in seed.subjects:
            if not subjects.exists(entry.id):
                subjects.create(Subject(id=entry.id, name=entry.name))
                created += 1

        classrooms = ClassroomRepository(db)
        for entry in seed.classes:
            if not classrooms.exists(entry.id):
                classrooms.create(Classroom(
                    id=entry.id,
                    name=entry.name,
                    homeroom_teacher_id=entry.homeroom_teacher_id,
                ))
                created += 1

        assignments = TeachingAssignmentRepository(db)
        for entry in seed.teaching_assignments:
            criteria = dict(teacher_id=entry.teacher_id, classroom_id=entry.class_id, subject_id=entry.subject_id)
            if assignments.find_one_by(**criteria) is None:
                assignments.create(TeachingAssignment(**criteria))
                created += 1

        students = StudentRepository(db)
        for entry in seed.students:
            if not students.exists(entry.id):
                students.create(Student(
                    id=entry.id,
                    name=entry.name,
                    date_of_birth=entry.date_of_birth,
                    gender=entry.gender,
                    parent_id=entry.parent_id,
                    classroom_id=entry.class_id,
                ))
                created += 1

        timetable = TimetableRepository(db)
        for entry in seed.timetable:
            slot = dict(classroom_id=entry.class_id, day_of_week=entry.day_of_week, period=entry.period)
            if timetable.find_one_by(**slot) is None:
                timetable.create(TimetableEntry(subject_name=entry.subject_name, **slot))
                created += 1

        reports = ReportRepository(db)
        for entry in seed.reports:
            if not reports.exists(entry.id):
                reports.create(Report(
                    id=entry.id,
                    student_id=entry.student_id,
                    term=entry.term,
                    year=entry.year,
                    records=[record.model_dump() for record in entry.records],
                    teacher_comments=entry.teacher_comments,
                ))
                created += 1

        invoices = InvoiceRepository(db)
        for entry in seed.invoices:
            if not invoices.exists(entry.id):
                invoices.create(Invoice(
                    id=entry.id,
                    student_id=entry.student_id,
                    month=entry.month,
                    year=entry.year,
                    items=[item.model_dump() for item in entry.items],
                    is_paid=entry.is_paid,
                ))
                created += 1

        announcements = AnnouncementRepository(db)
        for entry in seed.announcements:
            if not announcements.exists(entry.id):
                announcements.create(Announcement(
                    id=entry.id,
                    content=entry.content,
                    created_by=entry.created_by,
                    school_id=settings.SCHOOL_ID,
                ))
                created += 1

    for entry in seed.sessions:
        session_provider.register(entry.token, entry.user_id)

    logger.info(f"Seeded {created} rows and {len(seed.sessions)} sessions")
    return created


def seed_from_file(db: Session, filename: str = None) -> int:
    filename = filename or settings.SEED_FILE
    logger.info(f"Loading seed file {filename}")
    return seed_database(db, SchoolSeed.read_seed_from_file(filename))
