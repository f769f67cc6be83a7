import logging
from typing import List
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import BadRequestException
from edconnect_backend.interface.support import SupportRequestGet, SupportRequestUpdate
from edconnect_backend.model.enums import RequesterType, SupportStatus
from edconnect_backend.model.support import SupportRequest
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.core import require_permission, visible_records
from edconnect_backend.permissions.principal import Principal
from edconnect_backend.repositories.communication import SupportRequestRepository
from edconnect_backend.services.base import unit_of_work

logger = logging.getLogger(__name__)


def create_support_request(principal: Principal, content: str, db: Session) -> SupportRequestGet:
    if not content or not content.strip():
        raise BadRequestException(detail="Support request content is required")

    with unit_of_work(db):
        require_permission(principal, Action.SUBMIT_SUPPORT_REQUEST, None, db)
        request = SupportRequestRepository(db).create(SupportRequest(
            requester_id=principal.user_id,
            requester_type=RequesterType.for_role(principal.role),
            content=content.strip(),
            status=SupportStatus.NEW,
        ))
        result = SupportRequestGet.model_validate(request)

    logger.info(f"User {principal.user_id} opened support request {result.id}")
    return result


def list_support_requests(principal: Principal, db: Session) -> List[SupportRequestGet]:
    requests = visible_records(principal, Action.VIEW_SUPPORT_REQUESTS, db)
    return [SupportRequestGet.model_validate(r) for r in requests]


def update_support_request(principal: Principal, request_id: str, payload: SupportRequestUpdate, db: Session) -> SupportRequestGet:
    """Replace status and response; any status may follow any other."""
    with unit_of_work(db):
        require_permission(principal, Action.UPDATE_SUPPORT_REQUEST, request_id, db)
        request = SupportRequestRepository(db).update(request_id, {
            "status": payload.status,
            "response": payload.response,
        })
        result = SupportRequestGet.model_validate(request)

    logger.info(f"Admin {principal.user_id} set support request {request_id} to {payload.status.value}")
    return result
