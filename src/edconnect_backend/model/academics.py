from sqlalchemy import (
    BigInteger, Boolean, CheckConstraint, Column, DateTime,
    ForeignKey, Integer, JSON, String, Text, event
)
from sqlalchemy.orm import relationship

from .base import Base, generate_id, utcnow


class Report(Base):
    __tablename__ = 'report'

    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(True), nullable=False, default=utcnow, onupdate=utcnow)
    updated_by = Column(ForeignKey('user.id', ondelete='SET NULL'))
    student_id = Column(ForeignKey('student.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    term = Column(String(64), nullable=False)
    year = Column(Integer, nullable=False)
    # List of {subject_name, average_score, absences, conduct}
    records = Column(JSON, nullable=False, default=list)
    teacher_comments = Column(Text)

    student = relationship('Student', back_populates='reports')


class Invoice(Base):
    __tablename__ = 'invoice'
    __table_args__ = (
        CheckConstraint('month BETWEEN 1 AND 12'),
    )

    id = Column(String(64), primary_key=True, default=generate_id)
    created_at = Column(DateTime(True), nullable=False, default=utcnow)
    paid_at = Column(DateTime(True))
    student_id = Column(ForeignKey('student.id', ondelete='CASCADE', onupdate='RESTRICT'), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    # List of {description, amount}; amounts in whole dong
    items = Column(JSON, nullable=False, default=list)
    total = Column(BigInteger, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)

    student = relationship('Student', back_populates='invoices')

    @staticmethod
    def items_total(items) -> int:
        return sum(int(item["amount"]) for item in items or [])


class InvoiceTotalMismatch(ValueError):
    """Raised when an invoice total drifts from the sum of its items."""


@event.listens_for(Invoice, 'before_insert')
@event.listens_for(Invoice, 'before_update')
def _check_invoice_total(mapper, connection, target: Invoice):
    expected = Invoice.items_total(target.items)
    if target.total != expected:
        raise InvoiceTotalMismatch(
            f"Invoice {target.id} total {target.total} does not match item sum {expected}"
        )
