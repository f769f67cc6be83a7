import logging
from typing import List
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import BadRequestException
from edconnect_backend.interface.messages import AnnouncementGet, MessageGet
from edconnect_backend.interface.users import UserList
from edconnect_backend.model.message import Announcement, Message
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.core import require_permission, visible_records
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.repositories.communication import AnnouncementRepository, MessageRepository
from edconnect_backend.services.base import unit_of_work
from edconnect_backend.settings import settings

logger = logging.getLogger(__name__)


def list_contacts(principal: Principal, db: Session) -> List[UserList]:
    contacts = visible_records(principal, Action.VIEW_CONTACTS, db)
    return [UserList.model_validate(user) for user in contacts]


def get_conversation(principal: Principal, contact_id: str, db: Session) -> List[MessageGet]:
    """Messages between the principal and one of their contacts, oldest first."""
    require_permission(principal, Action.VIEW_CONTACTS, contact_id, db)
    messages = MessageRepository(db).find_conversation(principal.user_id, contact_id)
    return [MessageGet.model_validate(m) for m in messages]


def send_message(principal: Principal, receiver_id: str, content: str, db: Session) -> MessageGet:
    if not content or not content.strip():
        raise BadRequestException(detail="Message content is required")

    with unit_of_work(db):
        require_permission(principal, Action.SEND_MESSAGE, receiver_id, db)
        message = MessageRepository(db).create(Message(
            sender_id=principal.user_id,
            receiver_id=receiver_id,
            content=content.strip(),
        ))
        result = MessageGet.model_validate(message)

    logger.info(f"User {principal.user_id} sent message {result.id} to {receiver_id}")
    return result


def list_announcements(principal: Principal, db: Session) -> List[AnnouncementGet]:
    announcements = visible_records(principal, Action.VIEW_ANNOUNCEMENTS, db)
    return [AnnouncementGet.model_validate(a) for a in announcements]


def create_announcement(principal: Principal, content: str, db: Session) -> AnnouncementGet:
    if not content or not content.strip():
        raise BadRequestException(detail="Announcement content is required")

    with unit_of_work(db):
        require_permission(principal, Action.CREATE_ANNOUNCEMENT, None, db)
        announcement = AnnouncementRepository(db).create(Announcement(
            content=content.strip(),
            school_id=settings.SCHOOL_ID,
            created_by=principal.user_id,
        ))
        result = AnnouncementGet.model_validate(announcement)

    logger.info(f"Admin {principal.user_id} published announcement {result.id}")
    return result
