"""
Access policy entry points.

Every action is decided by exactly one registered handler. Identifiers a rule
needs in order to be evaluated are resolved first (raising NotFound when they
do not exist), then the rule itself decides; a denial never reveals more than
the action that was refused.
"""

import logging
from typing import Any, List, Optional
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import ForbiddenException
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.handlers import Allow, Decision, Deny, permission_registry
from edconnect_backend.permissions.handlers_impl import (
    ContactPermissionHandler,
    AnnouncementPermissionHandler,
    TimetablePermissionHandler,
    ClassroomPermissionHandler,
    RosterPermissionHandler,
    StudentRecordPermissionHandler,
    InvoicePermissionHandler,
    SupportPermissionHandler,
    AdministrationPermissionHandler,
)
from edconnect_backend.permissions.principal import Principal

logger = logging.getLogger(__name__)


def initialize_permission_handlers():
    """Initialize and register all permission handlers"""

    # Communication
    permission_registry.register(ContactPermissionHandler())
    permission_registry.register(AnnouncementPermissionHandler())
    permission_registry.register(TimetablePermissionHandler())

    # Classrooms and roster
    permission_registry.register(ClassroomPermissionHandler())
    permission_registry.register(RosterPermissionHandler())

    # Student records and billing
    permission_registry.register(StudentRecordPermissionHandler())
    permission_registry.register(InvoicePermissionHandler())

    # Administration
    permission_registry.register(SupportPermissionHandler())
    permission_registry.register(AdministrationPermissionHandler())

    missing = permission_registry.unregistered_actions()
    if missing:
        raise RuntimeError(f"No permission handler registered for {', '.join(a.value for a in missing)}")


def authorize(principal: Principal, action: Action, target: Optional[str], db: Session) -> Decision:
    """
    Decide whether ``principal`` may perform ``action`` on ``target``.

    Raises:
        NotFoundException: If ``target`` is needed by the rule and does not exist
    """
    decision = permission_registry.authorize(principal, action, target, db)
    if isinstance(decision, Deny):
        logger.debug(
            f"Denied {action.value} on {target} for {principal.user_id if principal else None}"
        )
    return decision


def require_permission(principal: Principal, action: Action, target: Optional[str], db: Session) -> Allow:
    """Like ``authorize`` but raises ``ForbiddenException`` on denial."""
    decision = authorize(principal, action, target, db)
    if not decision:
        raise ForbiddenException(detail={"action": action.value, "reason": decision.reason})
    return decision


def visible_records(principal: Principal, action: Action, db: Session) -> List[Any]:
    """Records a listing action returns for ``principal``."""
    return permission_registry.filter_visible(principal, action, db)


# Initialize handlers on module import
initialize_permission_handlers()
