from typing import Optional
from pydantic import BaseModel, ConfigDict

from edconnect_backend.model.enums import UserRole


class Principal(BaseModel):
    """The authenticated user an operation runs on behalf of."""

    user_id: str
    role: UserRole
    display_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(user_id=user.id, role=user.role, display_name=user.display_name)

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    @property
    def is_teacher(self) -> bool:
        return self.role is UserRole.TEACHER

    @property
    def is_parent(self) -> bool:
        return self.role is UserRole.PARENT
