from typing import Annotated, List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import BadRequestException
from edconnect_backend.database import get_db
from edconnect_backend.interface.classrooms import ClassroomGet
from edconnect_backend.interface.students import NewStudentPayload, StudentCreated, StudentGet, UpdateStudentPayload
from edconnect_backend.permissions.auth import get_current_principal
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.services import roster

classes_router = APIRouter()


@classes_router.get("/teachers/me/classes", response_model=List[ClassroomGet])
def list_classes(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return roster.list_classes(principal, db)


@classes_router.get("/classes/{class_id}/students", response_model=List[StudentGet])
def list_students_of_class(
    class_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return roster.list_students_of_class(principal, class_id, db)


@classes_router.post("/classes/{class_id}/students", response_model=StudentCreated, status_code=status.HTTP_201_CREATED)
def add_student(
    class_id: str,
    payload: NewStudentPayload,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    if payload.class_id != class_id:
        raise BadRequestException(detail="Class id in path and body differ")
    return roster.add_student(principal, payload, db)


@classes_router.get("/students/{student_id}", response_model=StudentGet)
def get_student(
    student_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return roster.get_student(principal, student_id, db)


@classes_router.put("/students/{student_id}", response_model=StudentGet)
def update_student(
    student_id: str,
    payload: UpdateStudentPayload,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return roster.update_student(principal, student_id, payload, db)


@classes_router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    roster.delete_student(principal, student_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@classes_router.get("/parents/me/students", response_model=List[StudentGet])
def list_children(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Session = Depends(get_db),
):
    return roster.list_children(principal, db)
