"""
Access Gate

Resolves a session token into the acting user and enforces the
authentication and admin preconditions. The gate only reads the identity
store; it never mutates anything.
"""

import logging
from typing import Optional

from food_ordering.core.config import Settings, get_settings
from food_ordering.core.errors import AuthForbidden, AuthMissing, NotAdmin
from food_ordering.models import User
from food_ordering.stores.base import BaseIdentityStore

logger = logging.getLogger(__name__)


class AccessGate:
    def __init__(self, store: BaseIdentityStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()

    def _lookup(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None
        session = self.store.get_session(token)
        if session is None:
            return None
        return self.store.get_user(session.username)

    def require_auth(self, token: Optional[str]) -> User:
        """
        Resolve the caller.

        Raises:
            AuthMissing: No token, unknown token, or session for a missing user
            AuthForbidden: Session belongs to the forbidden identity
        """
        user = self._lookup(token)
        if user is None:
            raise AuthMissing()
        if user.username == self.settings.forbidden_username:
            logger.warning("Rejected session bound to the forbidden identity")
            raise AuthForbidden()
        return user

    def require_admin(self, token: Optional[str]) -> User:
        """Like require_auth, but also raises NotAdmin for non-admin users."""
        user = self.require_auth(token)
        if not user.is_admin:
            raise NotAdmin()
        return user

    def who_am_i(self, token: Optional[str]) -> Optional[User]:
        """The logged-in user, or None. Never raises."""
        user = self._lookup(token)
        if user is None or user.username == self.settings.forbidden_username:
            return None
        return user
