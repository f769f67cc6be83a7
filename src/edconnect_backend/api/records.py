from typing import Annotated, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from edconnect_backend.database import get_db
from edconnect_backend.interface.invoices import InvoiceGet
from edconnect_backend.interface.reports import ReportGet, ReportUpdate
from edconnect_backend.interface.timetables import TimetableGet
from edconnect_backend.permissions.auth import get_current_principal
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.services import records

records_router = APIRouter()


@records_router.get("/students/{student_id}/reports", response_model=List[ReportGet])
def get_reports(
    student_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return records.get_reports(principal, student_id, db)


@records_router.put("/reports/{report_id}", response_model=ReportGet)
def update_report(
    report_id: str,
    payload: ReportUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return records.update_report(principal, report_id, payload, db)


@records_router.get("/students/{student_id}/invoices", response_model=List[InvoiceGet])
def get_invoices(
    student_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return records.get_invoices(principal, student_id, db)


@records_router.post("/invoices/{invoice_id}/pay", response_model=InvoiceGet)
def pay_invoice(
    invoice_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return records.pay_invoice(principal, invoice_id, db)


@records_router.get("/timetables", response_model=List[TimetableGet])
def get_timetables(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return records.get_timetables(principal, db)
