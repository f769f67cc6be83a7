from pydantic import BaseModel

class AdminStats(BaseModel):
    total_teachers: int
    total_parents: int
    total_students: int
    pending_support_requests: int
