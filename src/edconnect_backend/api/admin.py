from typing import Annotated, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from edconnect_backend.database import get_db
from edconnect_backend.interface.stats import AdminStats
from edconnect_backend.interface.support import SupportRequestCreate, SupportRequestGet, SupportRequestUpdate
from edconnect_backend.interface.users import UserGet, UserList
from edconnect_backend.permissions.auth import get_current_principal
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.services import administration, support

admin_router = APIRouter()


@admin_router.post("/support-requests", response_model=SupportRequestGet, status_code=status.HTTP_201_CREATED)
def create_support_request(
    payload: SupportRequestCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return support.create_support_request(principal, payload.content, db)


@admin_router.get("/users/{user_id}", response_model=UserGet)
def get_user(
    user_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return administration.get_user(principal, user_id, db)


@admin_router.get("/admin/users", response_model=List[UserList])
def list_users(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return administration.list_users(principal, db)


@admin_router.get("/admin/stats", response_model=AdminStats)
def get_admin_stats(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return administration.get_admin_stats(principal, db)


@admin_router.get("/admin/support-requests", response_model=List[SupportRequestGet])
def list_support_requests(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return support.list_support_requests(principal, db)


@admin_router.put("/admin/support-requests/{request_id}", response_model=SupportRequestGet)
def update_support_request(
    request_id: str,
    payload: SupportRequestUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return support.update_support_request(principal, request_id, payload, db)
