"""
Repository pattern implementation for the portal's entity store.

Each repository wraps a SQLAlchemy session and exposes keyed CRUD plus the
foreign-key listings the relationship resolver and domain services need.
"""

from .base import (
    BaseRepository,
    RepositoryError,
    NotFoundError,
    DuplicateError,
    ConstraintViolationError,
)
from .users import UserRepository
from .school import (
    ClassroomRepository,
    SubjectRepository,
    TeachingAssignmentRepository,
    StudentRepository,
    TimetableRepository,
)
from .records import ReportRepository, InvoiceRepository
from .communication import MessageRepository, AnnouncementRepository, SupportRequestRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "ConstraintViolationError",
    "UserRepository",
    "ClassroomRepository",
    "SubjectRepository",
    "TeachingAssignmentRepository",
    "StudentRepository",
    "TimetableRepository",
    "ReportRepository",
    "InvoiceRepository",
    "MessageRepository",
    "AnnouncementRepository",
    "SupportRequestRepository",
]
