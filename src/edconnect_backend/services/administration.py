from typing import List
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import NotFoundException
from edconnect_backend.interface.stats import AdminStats
from edconnect_backend.interface.users import UserGet, UserList
from edconnect_backend.model.enums import UserRole
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.core import require_permission, visible_records
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.repositories.communication import SupportRequestRepository
from edconnect_backend.repositories.school import StudentRepository
from edconnect_backend.repositories.users import UserRepository


def list_users(principal: Principal, db: Session) -> List[UserList]:
    return [UserList.model_validate(u) for u in visible_records(principal, Action.VIEW_ALL_USERS, db)]


def get_user(principal: Principal, user_id: str, db: Session) -> UserGet:
    """Anyone may read their own account; other accounts need admin rights."""
    if user_id != principal.user_id:
        require_permission(principal, Action.VIEW_ALL_USERS, None, db)
    user = UserRepository(db).get_by_id_optional(user_id)
    if user is None:
        raise NotFoundException(detail={"entity": "user", "id": user_id})
    return UserGet.model_validate(user)


def get_admin_stats(principal: Principal, db: Session) -> AdminStats:
    require_permission(principal, Action.VIEW_ADMIN_STATS, None, db)
    users = UserRepository(db)
    return AdminStats(
        total_teachers=users.count(role=UserRole.TEACHER),
        total_parents=users.count(role=UserRole.PARENT),
        total_students=StudentRepository(db).count(),
        pending_support_requests=SupportRequestRepository(db).count_pending(),
    )
