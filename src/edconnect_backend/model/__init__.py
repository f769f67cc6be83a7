from .base import Base, metadata
from .enums import UserRole, SupportStatus, RequesterType
from .auth import User
from .school import Subject, Classroom, TeachingAssignment, Student, TimetableEntry
from .academics import Report, Invoice, InvoiceTotalMismatch
from .message import Message, Announcement
from .support import SupportRequest

# Import all models to ensure relationships are properly set up
from . import auth, school, academics, message, support

__all__ = [
    'Base',
    'metadata',
    # Enumerations
    'UserRole',
    'SupportStatus',
    'RequesterType',
    # Users
    'User',
    # School structure
    'Subject',
    'Classroom',
    'TeachingAssignment',
    'Student',
    'TimetableEntry',
    # Academic records and billing
    'Report',
    'Invoice',
    'InvoiceTotalMismatch',
    # Communication
    'Message',
    'Announcement',
    # Support
    'SupportRequest',
]
