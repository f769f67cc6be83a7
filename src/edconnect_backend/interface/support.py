from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from edconnect_backend.interface.users import UserList
from edconnect_backend.model.enums import RequesterType, SupportStatus

class SupportRequestCreate(BaseModel):
    content: str = Field(max_length=16384)

class SupportRequestUpdate(BaseModel):
    """Replaces both status and response."""
    status: SupportStatus
    response: Optional[str] = Field(None, max_length=16384)

class SupportRequestGet(BaseModel):
    id: str
    content: str
    status: SupportStatus
    response: Optional[str] = None
    requester_id: str
    requester_type: RequesterType
    created_at: datetime
    requester_info: Optional[UserList] = Field(None, validation_alias='requester')

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
