"""
Derived relationships between teachers, classrooms, students and parents.

Every function reads the current state of the session it is given and keeps
no state of its own, so results always reflect the store at call time.
"""

from typing import Dict, List, NamedTuple, Optional, Set, Tuple
from sqlalchemy.orm import Session

from edconnect_backend.model.auth import User
from edconnect_backend.model.enums import UserRole
from edconnect_backend.model.school import Classroom, Student, Subject, TeachingAssignment

HOMEROOM_LABEL = "Chủ nhiệm"
SUBJECT_LABEL = "GV môn {subject_name}"
LABEL_SEPARATOR = ", "


class TeacherClassroom(NamedTuple):
    """A classroom together with the roles a teacher holds in it."""

    classroom: Classroom
    labels: Tuple[str, ...]

    @property
    def is_homeroom(self) -> bool:
        return HOMEROOM_LABEL in self.labels

    @property
    def role_label(self) -> str:
        return LABEL_SEPARATOR.join(self.labels)


class RelationshipResolver:
    """Pure queries over the store computing who relates to whom."""

    @classmethod
    def classrooms_for_teacher(cls, teacher_id: str, db: Session) -> List[TeacherClassroom]:
        """
        Classrooms where the teacher is homeroom teacher or holds a teaching
        assignment, each labelled with the teacher's roles there.

        The homeroom label always comes first; subject labels follow once per
        subject, in subject name order.
        """
        labels: Dict[str, List[str]] = {}
        classrooms: Dict[str, Classroom] = {}

        for classroom in db.query(Classroom).filter(Classroom.homeroom_teacher_id == teacher_id).all():
            classrooms[classroom.id] = classroom
            labels[classroom.id] = [HOMEROOM_LABEL]

        assignments = (
            db.query(Classroom, Subject.name)
            .join(TeachingAssignment, TeachingAssignment.classroom_id == Classroom.id)
            .join(Subject, Subject.id == TeachingAssignment.subject_id)
            .filter(TeachingAssignment.teacher_id == teacher_id)
            .order_by(Subject.name)
            .all()
        )
        for classroom, subject_name in assignments:
            classrooms.setdefault(classroom.id, classroom)
            classroom_labels = labels.setdefault(classroom.id, [])
            label = SUBJECT_LABEL.format(subject_name=subject_name)
            if label not in classroom_labels:
                classroom_labels.append(label)

        ordered = sorted(classrooms.values(), key=lambda c: (c.name, c.id))
        return [TeacherClassroom(c, tuple(labels[c.id])) for c in ordered]

    @classmethod
    def classroom_ids_for_teacher(cls, teacher_id: str, db: Session) -> Set[str]:
        homeroom = db.query(Classroom.id).filter(Classroom.homeroom_teacher_id == teacher_id)
        assigned = db.query(TeachingAssignment.classroom_id).filter(TeachingAssignment.teacher_id == teacher_id)
        return {row[0] for row in homeroom.union(assigned).all()}

    @classmethod
    def teacher_ids_for_classrooms(cls, classroom_ids: Set[str], db: Session) -> Set[str]:
        if not classroom_ids:
            return set()
        homeroom = db.query(Classroom.homeroom_teacher_id).filter(Classroom.id.in_(classroom_ids))
        assigned = db.query(TeachingAssignment.teacher_id).filter(TeachingAssignment.classroom_id.in_(classroom_ids))
        return {row[0] for row in homeroom.union(assigned).all()}

    @classmethod
    def contact_ids_for(cls, user_id: str, role: UserRole, db: Session) -> Set[str]:
        """
        Ids of the users a principal may exchange messages with.

        A parent's contacts are the homeroom and subject teachers of every
        classroom holding one of their children; a teacher's contacts are the
        parents of every student in the classrooms they teach. Admins have no
        messaging contacts.
        """
        if role is UserRole.PARENT:
            classroom_ids = {
                row[0] for row in
                db.query(Student.classroom_id).filter(Student.parent_id == user_id).distinct().all()
            }
            return cls.teacher_ids_for_classrooms(classroom_ids, db)

        if role is UserRole.TEACHER:
            classroom_ids = cls.classroom_ids_for_teacher(user_id, db)
            if not classroom_ids:
                return set()
            return {
                row[0] for row in
                db.query(Student.parent_id).filter(Student.classroom_id.in_(classroom_ids)).distinct().all()
            }

        if role is UserRole.ADMIN:
            return set()

        raise ValueError(f"Unhandled role {role!r}")

    @classmethod
    def contacts_for(cls, user_id: str, role: UserRole, db: Session) -> List[User]:
        contact_ids = cls.contact_ids_for(user_id, role, db)
        if not contact_ids:
            return []
        return (
            db.query(User)
            .filter(User.id.in_(contact_ids))
            .order_by(User.display_name, User.id)
            .all()
        )

    @classmethod
    def is_homeroom_teacher(cls, teacher_id: str, classroom_id: str, db: Session) -> bool:
        classroom = db.get(Classroom, classroom_id)
        return classroom is not None and classroom.homeroom_teacher_id == teacher_id

    @classmethod
    def is_authorized_for_class(cls, teacher_id: str, classroom_id: str, db: Session) -> bool:
        if cls.is_homeroom_teacher(teacher_id, classroom_id, db):
            return True
        assignment = (
            db.query(TeachingAssignment.id)
            .filter(
                TeachingAssignment.teacher_id == teacher_id,
                TeachingAssignment.classroom_id == classroom_id,
            )
            .first()
        )
        return assignment is not None

    @classmethod
    def is_authorized_for_student_records(cls, teacher_id: str, student_id: str, db: Session) -> bool:
        student: Optional[Student] = db.get(Student, student_id)
        if student is None:
            return False
        return cls.is_authorized_for_class(teacher_id, student.classroom_id, db)
