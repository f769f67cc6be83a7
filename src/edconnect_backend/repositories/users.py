"""
User repository.

Users are provisioned from seed data or as the parent created alongside a new
student; they are never deleted and their role never changes.
"""

from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import BaseRepository, DuplicateError
from ..model.auth import User
from ..model.enums import UserRole


class UserRepository(BaseRepository[User]):
    """Repository for User entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email address, ignoring case.

        Args:
            email: Email address to look up

        Returns:
            User if found, None otherwise
        """
        if not email:
            return None
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def list_all(self) -> List[User]:
        return self.list(order_by=[User.role, User.display_name])

    def create(self, entity: User) -> User:
        if self.find_by_email(entity.email) is not None:
            raise DuplicateError("User", {"email": entity.email})
        return super().create(entity)

    def get_or_create_parent(self, display_name: str, email: str, phone: Optional[str]) -> tuple[User, bool]:
        """
        Reuse the user registered under ``email`` or create a new parent.

        Returns:
            Tuple of the user and whether it was created
        """
        existing = self.find_by_email(email)
        if existing is not None:
            return existing, False

        parent = User(
            display_name=display_name,
            email=email,
            phone=phone,
            role=UserRole.PARENT,
        )
        return super().create(parent), True
