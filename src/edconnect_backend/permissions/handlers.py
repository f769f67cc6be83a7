from abc import ABC
from typing import Any, Dict, FrozenSet, List, Literal, Optional, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import ForbiddenException
from edconnect_backend.model.enums import UserRole
from edconnect_backend.permissions.actions import Action
from edconnect_backend.permissions.principal import Principal

UNAUTHORIZED = "Unauthorized"


class Allow(BaseModel):
    allowed: Literal[True] = True

    def __bool__(self) -> bool:
        return True


class Deny(BaseModel):
    allowed: Literal[False] = False
    reason: str = UNAUTHORIZED

    def __bool__(self) -> bool:
        return False


Decision = Union[Allow, Deny]


class PermissionHandler(ABC):
    """
    Base class for the policy rules of a group of related actions.

    ``ACTION_ROLES`` declares which roles may attempt each action and
    ``LISTING_ACTIONS`` the ones answered by ``filter_visible``. Handlers
    that need a concrete resource to decide override ``resolve_target`` (which
    raises when the identifier does not resolve) and ``check_condition``.
    """

    ACTION_ROLES: Dict[Action, FrozenSet[UserRole]] = {}
    LISTING_ACTIONS: FrozenSet[Action] = frozenset()

    @property
    def actions(self) -> List[Action]:
        return list(self.ACTION_ROLES)

    def check_role(self, principal: Principal, action: Action) -> bool:
        return principal.role in self.ACTION_ROLES.get(action, frozenset())

    def resolve_target(self, action: Action, target: Optional[str], db: Session) -> Any:
        """Load the entities needed to evaluate the condition for ``target``."""
        return None

    def check_condition(self, principal: Principal, action: Action, resource: Any, db: Session) -> bool:
        return True

    def can_perform_action(self, principal: Principal, action: Action, target: Optional[str], db: Session) -> bool:
        """Check if principal can perform an action on a resource.

        Args:
            principal: Current principal
            action: Action to perform
            target: Identifier of the concrete resource, where the action has one
            db: Session used to resolve the target
        """
        if not self.check_role(principal, action):
            return False
        resource = self.resolve_target(action, target, db)
        return self.check_condition(principal, action, resource, db)

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[Any]:
        """Records a listing action returns for this principal."""
        raise ForbiddenException(detail={"action": action.value})


class PermissionRegistry:
    """Registry mapping every action to the handler that decides it"""

    _instance = None
    _handlers: Dict[Action, PermissionHandler] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def register(self, handler: PermissionHandler):
        """Register a handler for every action it declares"""
        for action in handler.actions:
            self._handlers[action] = handler

    def get_handler(self, action: Action) -> Optional[PermissionHandler]:
        return self._handlers.get(action)

    def unregistered_actions(self) -> List[Action]:
        return [action for action in Action if action not in self._handlers]

    def authorize(self, principal: Principal, action: Action, target: Optional[str], db: Session) -> Decision:
        handler = self.get_handler(action)
        if handler is None or principal is None:
            return Deny()
        if handler.can_perform_action(principal, action, target, db):
            return Allow()
        return Deny()

    def filter_visible(self, principal: Principal, action: Action, db: Session) -> List[Any]:
        handler = self.get_handler(action)
        if (handler is None or principal is None
                or action not in handler.LISTING_ACTIONS
                or not handler.check_role(principal, action)):
            raise ForbiddenException(detail={"action": action.value})
        return handler.filter_visible(principal, action, db)


# Global registry instance
permission_registry = PermissionRegistry()
