from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from .base import Base, enum_values, generate_id, utcnow
from .enums import RequesterType, SupportStatus


class SupportRequest(Base):
    __tablename__ = 'support_request'

    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    requester_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    requester_type = Column(Enum(RequesterType, name='requester_type', values_callable=enum_values), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(Enum(SupportStatus, name='support_status', values_callable=enum_values), nullable=False, default=SupportStatus.NEW)
    response = Column(Text)

    requester = relationship('User', foreign_keys=[requester_id])
