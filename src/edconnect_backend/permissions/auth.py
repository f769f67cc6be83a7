"""
Principal resolution for incoming requests.

Tokens are issued by the login service outside this backend; here they are
opaque strings mapped to the user they were issued for.
"""

import logging
import threading
from typing import Annotated, Dict, Optional
from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from edconnect_backend.api.exceptions import UnauthorizedException
from edconnect_backend.database import get_db
from edconnect_backend.model.auth import User
from edconnect_backend.permissions.principal import Principal

logger = logging.getLogger(__name__)


class SessionPrincipalProvider:
    """Maps session tokens to the principal they authenticate"""

    def __init__(self):
        self._sessions: Dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, token: str, user_id: str):
        with self._lock:
            self._sessions[token] = user_id

    def current_principal(self, token: Optional[str], db: Session) -> Optional[Principal]:
        """Principal for ``token``, or None if the token or its user is unknown"""
        if not token:
            return None
        with self._lock:
            user_id = self._sessions.get(token)
        if user_id is None:
            return None
        user = db.get(User, user_id)
        if user is None:
            logger.warning(f"Session token references missing user {user_id}")
            return None
        return Principal.from_user(user)


session_provider = SessionPrincipalProvider()


def get_bearer_token(request: Request) -> Optional[str]:
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not param:
        return None
    return param


def get_current_principal(request: Request, db: Annotated[Session, Depends(get_db)]) -> Principal:
    principal = session_provider.current_principal(get_bearer_token(request), db)
    if principal is None:
        raise UnauthorizedException(headers={"WWW-Authenticate": "Bearer"})
    return principal
