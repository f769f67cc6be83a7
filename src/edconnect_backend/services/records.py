"""
Academic reports, tuition invoices and timetables.
"""

import logging
from typing import List
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import BadRequestException
from edconnect_backend.interface.invoices import InvoiceGet
from edconnect_backend.interface.reports import ReportGet, ReportUpdate
from edconnect_backend.interface.timetables import TimetableEntryGet, TimetableGet
from edconnect_backend.model.academics import Report
from edconnect_backend.model.base import utcnow
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.core import require_permission, visible_records
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.repositories.records import InvoiceRepository, ReportRepository
from edconnect_backend.repositories.school import TimetableRepository
from edconnect_backend.services.base import unit_of_work

logger = logging.getLogger(__name__)

# Id the client uses for a report it has not saved yet
NEW_REPORT_PREFIX = "new_report_"


def get_reports(principal: Principal, student_id: str, db: Session) -> List[ReportGet]:
    require_permission(principal, Action.VIEW_REPORTS, student_id, db)
    return [ReportGet.model_validate(r) for r in ReportRepository(db).find_by_student(student_id)]


def _student_for_new_report(report_id: str, payload: ReportUpdate) -> str:
    """Student of a report that does not exist yet, from the payload or the id."""
    if payload.student_id:
        return payload.student_id
    if report_id.startswith(NEW_REPORT_PREFIX) and len(report_id) > len(NEW_REPORT_PREFIX):
        return report_id[len(NEW_REPORT_PREFIX):]
    raise BadRequestException(detail="A new report needs a student")


def update_report(principal: Principal, report_id: str, payload: ReportUpdate, db: Session) -> ReportGet:
    """
    Save a report under ``report_id``, creating it if it does not exist yet.

    An existing report keeps its student, term and year; sending different
    ones is rejected. Its records and comments are replaced by the submitted
    ones. A new report takes its student from the payload or, failing that,
    from a ``new_report_<studentId>`` id, and needs a term and year.
    """
    if not report_id or not report_id.strip():
        raise BadRequestException(detail="Report id is required")

    records = [record.model_dump() for record in payload.records]
    repository = ReportRepository(db)

    with unit_of_work(db):
        existing = repository.get_by_id_optional(report_id)
        if existing is not None:
            student_id = existing.student_id
        else:
            student_id = _student_for_new_report(report_id, payload)
        require_permission(principal, Action.EDIT_REPORT, student_id, db)

        if existing is None:
            if payload.term is None or payload.year is None:
                raise BadRequestException(detail="A new report needs a term and a year")
            report = repository.create(Report(
                id=report_id,
                student_id=student_id,
                term=payload.term,
                year=payload.year,
                records=records,
                teacher_comments=payload.teacher_comments,
                updated_by=principal.user_id,
            ))
        else:
            for field in ("student_id", "term", "year"):
                sent = getattr(payload, field)
                if sent is not None and sent != getattr(existing, field):
                    raise BadRequestException(detail=f"The {field} of an existing report cannot be changed")
            report = repository.update(report_id, {
                "records": records,
                "teacher_comments": payload.teacher_comments,
                "updated_by": principal.user_id,
            })
        result = ReportGet.model_validate(report)

    logger.info(
        f"Teacher {principal.user_id} {'created' if existing is None else 'updated'} report {report_id} for student {student_id}"
    )
    return result


def get_invoices(principal: Principal, student_id: str, db: Session) -> List[InvoiceGet]:
    require_permission(principal, Action.VIEW_INVOICES, student_id, db)
    return [InvoiceGet.model_validate(i) for i in InvoiceRepository(db).find_by_student(student_id)]


def pay_invoice(principal: Principal, invoice_id: str, db: Session) -> InvoiceGet:
    """
    Mark an invoice as paid.

    Paying an invoice that is already paid succeeds without changing it.
    """
    with unit_of_work(db):
        require_permission(principal, Action.PAY_INVOICE, invoice_id, db)
        repository = InvoiceRepository(db)
        invoice = repository.get_for_update(invoice_id)
        already_paid = invoice.is_paid
        if not already_paid:
            invoice.is_paid = True
            invoice.paid_at = utcnow()
            repository.flush()
        result = InvoiceGet.model_validate(invoice)

    if already_paid:
        logger.info(f"Invoice {invoice_id} was already paid; nothing to do")
    else:
        logger.info(f"Parent {principal.user_id} paid invoice {invoice_id} ({result.total})")
    return result


def get_timetables(principal: Principal, db: Session) -> List[TimetableGet]:
    """One timetable per child for parents, per taught classroom for teachers."""
    scopes = visible_records(principal, Action.VIEW_TIMETABLE, db)
    repository = TimetableRepository(db)
    timetables = []
    for classroom, student in scopes:
        entries = repository.find_by_classroom(classroom.id)
        timetables.append(TimetableGet(
            student_id=student.id if student is not None else None,
            student_name=student.name if student is not None else None,
            class_id=classroom.id,
            class_name=classroom.name,
            entries=[TimetableEntryGet.model_validate(e) for e in entries],
        ))
    return timetables
