from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class ClassroomGet(BaseModel):
    id: str
    name: str
    homeroom_teacher_id: str
    teacher_role: Optional[str] = Field(None, description="The requesting teacher's roles in this classroom")

    model_config = ConfigDict(from_attributes=True)
