from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class Message(Base):
    __tablename__ = 'message'
    __table_args__ = (
        Index('msg_conversation_idx', 'sender_id', 'receiver_id', 'timestamp'),
    )

    id = Column(String(64), primary_key=True, default=generate_id)
    sender_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False)
    receiver_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime(True), nullable=False, default=utcnow)

    # Relationships
    sender = relationship('User', foreign_keys=[sender_id])
    receiver = relationship('User', foreign_keys=[receiver_id])


class Announcement(Base):
    __tablename__ = 'announcement'

    id = Column(String(64), primary_key=True, default=generate_id)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime(True), nullable=False, default=utcnow, index=True)
    school_id = Column(String(64), nullable=False)
    created_by = Column(ForeignKey('user.id', ondelete='SET NULL'))
