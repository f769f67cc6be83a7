from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    PARENT = "PARENT"


class SupportStatus(str, Enum):
    NEW = "Mới"
    IN_PROGRESS = "Đang xử lý"
    RESOLVED = "Đã giải quyết"


class RequesterType(str, Enum):
    PARENT = "PHUHUYNH"
    TEACHER = "GIAOVIEN"

    @classmethod
    def for_role(cls, role: UserRole) -> "RequesterType":
        if role is UserRole.PARENT:
            return cls.PARENT
        if role is UserRole.TEACHER:
            return cls.TEACHER
        raise ValueError(f"Role {role.value} cannot file support requests")
