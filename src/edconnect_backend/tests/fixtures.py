"""
Shared helpers for building test principals and payloads.
"""

from datetime import date

from edconnect_backend.interface.students import NewStudentPayload
from edconnect_backend.model.enums import UserRole
from edconnect_backend.permissions.principal import Principal


def make_principal(user_id: str, role: UserRole) -> Principal:
    return Principal(user_id=user_id, role=role)


def new_student_payload(**overrides) -> NewStudentPayload:
    data = dict(
        class_id="lop_1a",
        student_name="Ngô Gia Bảo",
        student_date_of_birth=date(2018, 1, 20),
        student_gender="Nam",
        parent_name="Ngô Văn Tài",
        parent_email="new@x.com",
        parent_phone="0904000001",
    )
    data.update(overrides)
    return NewStudentPayload(**data)
