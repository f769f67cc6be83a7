"""
Permission system for the school portal.

Main components:
- principal: the authenticated user an operation runs for
- actions: the closed set of actions the policy decides
- relationships: derived teacher/classroom/parent relationships
- handlers: base permission handler interface and registry
- handlers_impl: concrete permission handlers per action group
- core: authorization entry points and handler registration
- auth: principal resolution from session tokens
"""

from .principal import Principal
from .actions import Action
from .relationships import (
    RelationshipResolver,
    TeacherClassroom,
    HOMEROOM_LABEL,
    SUBJECT_LABEL,
)
from .handlers import (
    Allow,
    Deny,
    Decision,
    PermissionHandler,
    PermissionRegistry,
    permission_registry,
)
from .core import (
    authorize,
    require_permission,
    visible_records,
    initialize_permission_handlers,
)

__all__ = [
    "Principal",
    "Action",
    "RelationshipResolver",
    "TeacherClassroom",
    "HOMEROOM_LABEL",
    "SUBJECT_LABEL",
    "Allow",
    "Deny",
    "Decision",
    "PermissionHandler",
    "PermissionRegistry",
    "permission_registry",
    "authorize",
    "require_permission",
    "visible_records",
    "initialize_permission_handlers",
]
