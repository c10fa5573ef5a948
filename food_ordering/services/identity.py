"""
Identity Service

Registration, login and logout against the identity store.

Identity is username-only: there are no passwords. Two names are special:
    - the admin username is pre-provisioned and is the only admin
    - the forbidden username can never register or log in

Author: Khalil Bannouri
Version: 3.1.0
"""

import logging
from typing import Any, Optional

from food_ordering.core.config import Settings, get_settings
from food_ordering.core.errors import (
    AuthForbidden,
    ForbiddenUsername,
    InvalidUsername,
    UserExists,
    UserNotFound,
)
from food_ordering.models import Role, Session, User
from food_ordering.services.validators import is_valid_username, normalize_username
from food_ordering.stores.base import BaseIdentityStore

logger = logging.getLogger(__name__)


class IdentityService:
    """
    Username-only account management.

    Attributes:
        store: Identity store holding users and sessions
        settings: Supplies the admin and forbidden usernames
    """

    def __init__(self, store: BaseIdentityStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()

    def _clean_username(self, raw_username: Any) -> str:
        username = normalize_username(raw_username)
        if not is_valid_username(username):
            raise InvalidUsername()
        return username

    def is_forbidden(self, username: str) -> bool:
        return username == self.settings.forbidden_username

    def register(self, raw_username: Any) -> User:
        """
        Create a new user.

        Args:
            raw_username: Untrusted input; trimmed before validation

        Returns:
            User: The new user; role is admin only for the admin username

        Raises:
            InvalidUsername: Not 2-20 chars of letters, digits, underscore
            ForbiddenUsername: The reserved forbidden identity
            UserExists: Username already registered (case-sensitive)
        """
        username = self._clean_username(raw_username)
        if self.is_forbidden(username):
            logger.warning(f"Registration attempt with forbidden username {username!r}")
            raise ForbiddenUsername()

        role = Role.ADMIN if username == self.settings.admin_username else Role.USER
        user = User(username=username, role=role)
        if not self.store.add_user(user):
            raise UserExists()

        logger.info(f"Registered user {username!r} (role={role.value})")
        return user

    def login(self, raw_username: Any) -> tuple[Session, User]:
        """
        Start a session for an existing user.

        Raises:
            InvalidUsername: Malformed username
            AuthForbidden: The forbidden identity
            UserNotFound: No such user
        """
        username = self._clean_username(raw_username)
        if self.is_forbidden(username):
            logger.warning(f"Login attempt with forbidden username {username!r}")
            raise AuthForbidden()

        user = self.store.get_user(username)
        if user is None:
            raise UserNotFound()

        session = self.store.create_session(username)
        logger.info(f"User {username!r} logged in")
        return session, user

    def logout(self, token: Optional[str]) -> None:
        """Drop the session if it exists. Unknown tokens are a no-op."""
        if not token:
            return
        if self.store.remove_session(token):
            logger.info("Session closed")
