from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

class FeeItem(BaseModel):
    description: str
    amount: int = Field(description="Amount in dong")

class InvoiceGet(BaseModel):
    id: str
    student_id: str
    month: int = Field(ge=1, le=12)
    year: int
    items: List[FeeItem]
    total: int
    is_paid: bool
    paid_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode='after')
    def total_matches_items(self):
        expected = sum(item.amount for item in self.items)
        if self.total != expected:
            raise ValueError(f'Invoice total {self.total} does not match item sum {expected}')
        return self
