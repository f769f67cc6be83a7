"""
Repositories for academic reports and tuition invoices.
"""

from typing import List
from sqlalchemy.orm import Session

from .base import BaseRepository, ConstraintViolationError
from ..model.academics import Invoice, Report
from ..model.school import Student


class ReportRepository(BaseRepository[Report]):

    def __init__(self, db: Session):
        super().__init__(db, Report)

    def create(self, entity: Report) -> Report:
        self.require_reference(Student, entity.student_id)
        return super().create(entity)

    def find_by_student(self, student_id: str) -> List[Report]:
        return self.list(order_by=[Report.year, Report.term, Report.id], student_id=student_id)


class InvoiceRepository(BaseRepository[Invoice]):
    """Invoices keep ``total`` equal to the sum of their item amounts."""

    def __init__(self, db: Session):
        super().__init__(db, Invoice)

    def create(self, entity: Invoice) -> Invoice:
        self.require_reference(Student, entity.student_id)
        expected = Invoice.items_total(entity.items)
        if entity.total is None:
            entity.total = expected
        elif entity.total != expected:
            raise ConstraintViolationError(
                f"Invoice total {entity.total} does not match item sum {expected}"
            )
        return super().create(entity)

    def find_by_student(self, student_id: str) -> List[Invoice]:
        return self.list(order_by=[Invoice.year, Invoice.month, Invoice.id], student_id=student_id)
