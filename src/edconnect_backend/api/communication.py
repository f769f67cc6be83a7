from typing import Annotated, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from edconnect_backend.database import get_db
from edconnect_backend.interface.messages import AnnouncementCreate, AnnouncementGet, MessageCreate, MessageGet
from edconnect_backend.interface.users import UserList
from edconnect_backend.permissions.auth import get_current_principal
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.services import communication

communication_router = APIRouter()


@communication_router.get("/me/contacts", response_model=List[UserList])
def list_contacts(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return communication.list_contacts(principal, db)


@communication_router.get("/messages/{contact_id}", response_model=List[MessageGet])
def get_conversation(
    contact_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return communication.get_conversation(principal, contact_id, db)


@communication_router.post("/messages", response_model=MessageGet, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return communication.send_message(principal, payload.receiver_id, payload.content, db)


@communication_router.get("/announcements", response_model=List[AnnouncementGet])
def list_announcements(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return communication.list_announcements(principal, db)


@communication_router.post("/announcements", response_model=AnnouncementGet, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: AnnouncementCreate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return communication.create_announcement(principal, payload.content, db)
