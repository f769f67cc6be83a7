from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.orm import relationship, validates

from .base import Base, enum_values, generate_id, utcnow
from .enums import UserRole


class User(Base):
    __tablename__ = 'user'

    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    display_name = Column(String(255), nullable=False)
    # Stored lower-cased so the unique index is case-insensitive
    email = Column(String(320), nullable=False, unique=True, index=True)
    phone = Column(String(255))
    gender = Column(String(32))
    avatar_url = Column(String(2048))
    role = Column(Enum(UserRole, name='user_role', values_callable=enum_values), nullable=False, index=True)

    # Relationships
    children = relationship('Student', back_populates='parent', foreign_keys='Student.parent_id')
    homeroom_classrooms = relationship('Classroom', back_populates='homeroom_teacher')
    teaching_assignments = relationship('TeachingAssignment', back_populates='teacher')

    @validates('email')
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value

    @validates('role')
    def freeze_role(self, key, value):
        if self.role is not None and self.role != value:
            raise ValueError("User role is immutable once created")
        return value
