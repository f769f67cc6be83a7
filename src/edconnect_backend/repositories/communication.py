"""
Repositories for messages, announcements and support requests.
"""

from typing import List, Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload

from .base import BaseRepository
from ..model.auth import User
from ..model.enums import SupportStatus
from ..model.message import Announcement, Message
from ..model.support import SupportRequest


class MessageRepository(BaseRepository[Message]):

    def __init__(self, db: Session):
        super().__init__(db, Message)

    def create(self, entity: Message) -> Message:
        self.require_reference(User, entity.sender_id)
        self.require_reference(User, entity.receiver_id)
        return super().create(entity)

    def find_conversation(self, user_id: str, other_user_id: str) -> List[Message]:
        """All messages exchanged between two users, oldest first."""
        return (
            self.db.query(Message)
            .filter(
                or_(
                    and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
                    and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
                )
            )
            .order_by(Message.timestamp, Message.id)
            .all()
        )


class AnnouncementRepository(BaseRepository[Announcement]):

    def __init__(self, db: Session):
        super().__init__(db, Announcement)

    def list_latest_first(self, school_id: Optional[str] = None) -> List[Announcement]:
        query = self.db.query(Announcement)
        if school_id is not None:
            query = query.filter(Announcement.school_id == school_id)
        return query.order_by(Announcement.timestamp.desc(), Announcement.id).all()


class SupportRequestRepository(BaseRepository[SupportRequest]):

    def __init__(self, db: Session):
        super().__init__(db, SupportRequest)

    def create(self, entity: SupportRequest) -> SupportRequest:
        self.require_reference(User, entity.requester_id)
        return super().create(entity)

    def list_latest_first(self) -> List[SupportRequest]:
        return (
            self.db.query(SupportRequest)
            .options(selectinload(SupportRequest.requester))
            .order_by(SupportRequest.created_at.desc(), SupportRequest.id)
            .all()
        )

    def count_pending(self) -> int:
        return (
            self.db.query(SupportRequest)
            .filter(SupportRequest.status != SupportStatus.RESOLVED)
            .count()
        )
