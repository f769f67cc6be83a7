from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from edconnect_backend.interface.base import BaseEntityGet
from edconnect_backend.model.enums import UserRole

class UserGet(BaseEntityGet):
    id: str = Field(description="User unique identifier")
    display_name: str = Field(description="Full name shown in the portal")
    email: str = Field(description="Email address, unique regardless of case")
    phone: Optional[str] = Field(None, description="Phone number")
    gender: Optional[str] = None
    avatar_url: Optional[str] = None
    role: UserRole

class UserList(BaseModel):
    id: str
    display_name: str
    email: str
    phone: Optional[str] = None
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
