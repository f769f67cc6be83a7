from typing import Any, List, Optional, Tuple, Type
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import ConflictException, NotFoundException
from edconnect_backend.model.academics import Invoice
from edconnect_backend.model.auth import User
from edconnect_backend.model.enums import UserRole
from edconnect_backend.model.school import Classroom, Student
from edconnect_backend.model.support import SupportRequest
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.handlers import PermissionHandler
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.permissions.relationships import RelationshipResolver
from edconnect_backend.repositories.communication import AnnouncementRepository, SupportRequestRepository
from edconnect_backend.repositories.school import StudentRepository
from edconnect_backend.repositories.users import UserRepository
from edconnect_backend.settings import settings

ADMIN = frozenset({UserRole.ADMIN})
TEACHER = frozenset({UserRole.TEACHER})
PARENT = frozenset({UserRole.PARENT})
MEMBERS = frozenset({UserRole.TEACHER, UserRole.PARENT})


def _get_or_404(model: Type[Any], entity_id: Optional[str], db: Session) -> Any:
    entity = db.get(model, entity_id) if entity_id else None
    if entity is None:
        raise NotFoundException(detail={"entity": model.__tablename__, "id": entity_id})
    return entity


class ContactPermissionHandler(PermissionHandler):
    """Messaging is limited to the contacts derived from shared classrooms."""

    ACTION_ROLES = {
        Action.VIEW_CONTACTS: MEMBERS,
        Action.SEND_MESSAGE: MEMBERS,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_CONTACTS})

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Any:
        # Listing contacts has no target; a conversation or message names the other user
        if action is Action.VIEW_CONTACTS and target is None:
            return None
        return _get_or_404(User, target, db)

    def check_condition(self, principal: Principal, action: Action, resource: Any, db: Session) -> bool:
        if resource is None:
            return True
        contact_ids = RelationshipResolver.contact_ids_for(principal.user_id, principal.role, db)
        return resource.id in contact_ids

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[User]:
        return RelationshipResolver.contacts_for(principal.user_id, principal.role, db)


class AnnouncementPermissionHandler(PermissionHandler):

    ACTION_ROLES = {
        Action.VIEW_ANNOUNCEMENTS: MEMBERS,
        Action.CREATE_ANNOUNCEMENT: ADMIN,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_ANNOUNCEMENTS})

    def filter_visible(self, principal: Principal, action: Action, db: Session):
        return AnnouncementRepository(db).list_latest_first(settings.SCHOOL_ID)


class TimetablePermissionHandler(PermissionHandler):

    ACTION_ROLES = {
        Action.VIEW_TIMETABLE: MEMBERS,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_TIMETABLE})

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[Tuple[Classroom, Optional[Student]]]:
        """Parents see each child's classroom, teachers every classroom they teach."""
        if principal.is_parent:
            children = StudentRepository(db).find_by_parent(principal.user_id)
            return [(child.classroom, child) for child in children]
        return [
            (entry.classroom, None)
            for entry in RelationshipResolver.classrooms_for_teacher(principal.user_id, db)
        ]


class ClassroomPermissionHandler(PermissionHandler):

    ACTION_ROLES = {
        Action.VIEW_CLASSES_OWNED: TEACHER,
        Action.VIEW_STUDENTS_OF_CLASS: TEACHER,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_CLASSES_OWNED})

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Any:
        if action is Action.VIEW_STUDENTS_OF_CLASS:
            return _get_or_404(Classroom, target, db)
        return None

    def check_condition(self, principal: Principal, action: Action, resource: Any, db: Session) -> bool:
        if action is Action.VIEW_STUDENTS_OF_CLASS:
            return RelationshipResolver.is_authorized_for_class(principal.user_id, resource.id, db)
        return True

    def filter_visible(self, principal: Principal, action: Action, db: Session):
        return RelationshipResolver.classrooms_for_teacher(principal.user_id, db)


class RosterPermissionHandler(PermissionHandler):
    """
    Roster changes belong to the homeroom teacher of the affected classroom.

    Adding targets the classroom id, editing and deleting target the student
    id; all three end in the same homeroom check against one classroom.
    """

    ACTION_ROLES = {
        Action.ADD_STUDENT: TEACHER,
        Action.EDIT_STUDENT: TEACHER,
        Action.DELETE_STUDENT: TEACHER,
    }

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Classroom:
        if action is Action.ADD_STUDENT:
            classroom = db.get(Classroom, target) if target else None
            if classroom is None:
                raise ConflictException(detail={"entity": Classroom.__tablename__, "id": target})
            return classroom
        student = _get_or_404(Student, target, db)
        return student.classroom

    def check_condition(self, principal: Principal, action: Action, resource: Classroom, db: Session) -> bool:
        return RelationshipResolver.is_homeroom_teacher(principal.user_id, resource.id, db)


class StudentRecordPermissionHandler(PermissionHandler):
    """
    Parents read their own children and their reports; teachers of the
    child's classroom read them and edit reports.
    """

    ACTION_ROLES = {
        Action.VIEW_STUDENT: MEMBERS,
        Action.VIEW_REPORTS: MEMBERS,
        Action.EDIT_REPORT: TEACHER,
        Action.VIEW_CHILDREN: PARENT,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_CHILDREN})

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Optional[Student]:
        if action is Action.VIEW_CHILDREN:
            return None
        return _get_or_404(Student, target, db)

    def check_condition(self, principal: Principal, action: Action, resource: Optional[Student], db: Session) -> bool:
        if resource is None:
            return True
        if principal.is_parent:
            return resource.parent_id == principal.user_id
        return RelationshipResolver.is_authorized_for_student_records(principal.user_id, resource.id, db)

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[Student]:
        return StudentRepository(db).find_by_parent(principal.user_id)


class InvoicePermissionHandler(PermissionHandler):
    """Invoices are visible to, and payable by, the student's parent only."""

    ACTION_ROLES = {
        Action.VIEW_INVOICES: PARENT,
        Action.PAY_INVOICE: PARENT,
    }

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Student:
        if action is Action.PAY_INVOICE:
            invoice = _get_or_404(Invoice, target, db)
            return invoice.student
        return _get_or_404(Student, target, db)

    def check_condition(self, principal: Principal, action: Action, resource: Student, db: Session) -> bool:
        return resource.parent_id == principal.user_id


class SupportPermissionHandler(PermissionHandler):

    ACTION_ROLES = {
        Action.SUBMIT_SUPPORT_REQUEST: MEMBERS,
        Action.VIEW_SUPPORT_REQUESTS: ADMIN,
        Action.UPDATE_SUPPORT_REQUEST: ADMIN,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_SUPPORT_REQUESTS})

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Any:
        if action is Action.UPDATE_SUPPORT_REQUEST:
            return _get_or_404(SupportRequest, target, db)
        return None

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[SupportRequest]:
        return SupportRequestRepository(db).list_latest_first()


class AdministrationPermissionHandler(PermissionHandler):

    ACTION_ROLES = {
        Action.VIEW_ALL_USERS: ADMIN,
        Action.VIEW_ADMIN_STATS: ADMIN,
    }
    LISTING_ACTIONS = frozenset({Action.VIEW_ALL_USERS})

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[User]:
        return UserRepository(db).list_all()
