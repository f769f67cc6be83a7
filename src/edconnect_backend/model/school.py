from sqlalchemy import (
    CheckConstraint, Column, Date, DateTime, ForeignKey,
    Integer, String, UniqueConstraint
)
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class Subject(Base):
    __tablename__ = 'subject'

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, unique=True)


class Classroom(Base):
    __tablename__ = 'classroom'

    id = Column(String(64), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    homeroom_teacher_id = Column(ForeignKey('user.id', ondelete='RESTRICT', onupdate='RESTRICT'), nullable=False, index=True)

    # Relationships
    homeroom_teacher = relationship('User', back_populates='homeroom_classrooms')
    students = relationship('Student', back_populates='classroom')
    teaching_assignments = relationship('TeachingAssignment', back_populates='classroom')
    timetable_entries = relationship('TimetableEntry', back_populates='classroom')


class TeachingAssignment(Base):
    __tablename__ = 'teaching_assignment'
    __table_args__ = (
        UniqueConstraint('teacher_id', 'classroom_id', 'subject_id', name='teaching_assignment_key'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    teacher_id = Column(ForeignKey('user.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    classroom_id = Column(ForeignKey('classroom.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    subject_id = Column(ForeignKey('subject.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False)

    # Relationships
    teacher = relationship('User', back_populates='teaching_assignments')
    classroom = relationship('Classroom', back_populates='teaching_assignments')
    subject = relationship('Subject')


class Student(Base):
    __tablename__ = 'student'

    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    name = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String(32), nullable=False)
    avatar_url = Column(String(2048))
    parent_id = Column(ForeignKey('user.id', ondelete='RESTRICT', onupdate='RESTRICT'), nullable=False, index=True)
    classroom_id = Column(ForeignKey('classroom.id', ondelete='RESTRICT', onupdate='RESTRICT'), nullable=False, index=True)

    # Relationships
    parent = relationship('User', back_populates='children', foreign_keys=[parent_id])
    classroom = relationship('Classroom', back_populates='students')
    reports = relationship('Report', back_populates='student', cascade='all, delete-orphan')
    invoices = relationship('Invoice', back_populates='student', cascade='all, delete-orphan')


class TimetableEntry(Base):
    __tablename__ = 'timetable_entry'
    __table_args__ = (
        UniqueConstraint('classroom_id', 'day_of_week', 'period', name='timetable_slot_key'),
        CheckConstraint('day_of_week BETWEEN 2 AND 7'),
        CheckConstraint('period >= 1'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    classroom_id = Column(ForeignKey('classroom.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    # 2 is Monday, 7 is Saturday
    day_of_week = Column(Integer, nullable=False)
    period = Column(Integer, nullable=False)
    subject_name = Column(String(255), nullable=False)

    classroom = relationship('Classroom', back_populates='timetable_entries')
