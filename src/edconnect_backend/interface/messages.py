from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class MessageCreate(BaseModel):
    # sender is always the current principal
    receiver_id: str = Field(min_length=1)
    content: str = Field(max_length=16384)

class MessageGet(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)

class AnnouncementCreate(BaseModel):
    content: str = Field(max_length=16384)

class AnnouncementGet(BaseModel):
    id: str
    content: str
    timestamp: datetime
    school_id: str

    model_config = ConfigDict(from_attributes=True)
