"""Explicit authentication context.

Holds the cached ``AuthUser`` for one client session and fans session changes
out to subscribers. Construct one per session and pass it to whatever needs
it (``CompanyStore`` subscribes to it).
"""

import logging
from collections.abc import Callable
from typing import Any

from careerhub.backend.base import AuthBackend
from careerhub.core.config import AuthConfig
from careerhub.core.errors import CareerHubError, FormValidationError
from careerhub.core.schemas import AuthUser
from careerhub.forms.auth_forms import validate_password_reset, validate_signup
from careerhub.services import auth_service

logger = logging.getLogger(__name__)

UserCallback = Callable[[AuthUser | None], None]


class AuthContext:
    """Session state over an ``AuthBackend``.

    Usage::

        ctx = AuthContext(auth_backend)
        ctx.initialize()
        unsubscribe = ctx.subscribe(lambda user: print(user))
        error = ctx.login("a@b.co", "Secret123")
    """

    def __init__(self, auth: AuthBackend, config: AuthConfig | None = None) -> None:
        self._auth = auth
        self._config = config or AuthConfig()
        self._user: AuthUser | None = None
        self._is_loading = True
        self._subscribers: list[UserCallback] = []
        self._unsubscribe_backend: Callable[[], None] | None = None

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def initialize(self) -> None:
        """Load the current session and start listening for session changes."""
        try:
            row = self._auth.get_user()
            if row is not None:
                self._set_user(auth_service.to_auth_user(row))
        except CareerHubError as e:
            logger.error("Failed to initialize auth: %s", e)
        finally:
            self._is_loading = False

        if self._unsubscribe_backend is None:
            self._unsubscribe_backend = self._auth.on_auth_state_change(self._on_session_change)

    def close(self) -> None:
        if self._unsubscribe_backend is not None:
            self._unsubscribe_backend()
            self._unsubscribe_backend = None
        self._subscribers.clear()

    def subscribe(self, callback: UserCallback) -> Callable[[], None]:
        """Call ``callback(user)`` on every session change; returns an unsubscribe."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def signup(self, email: str, password: str, confirm: str | None = None) -> str | None:
        """Register a recruiter; with ``confirm`` the passwords are checked first."""
        if confirm is not None:
            try:
                validate_signup(password, confirm, self._config.min_password_length)
            except FormValidationError as e:
                return str(e)
        return auth_service.signup(self._auth, email, password).error

    def login(self, email: str, password: str) -> str | None:
        result = auth_service.login(self._auth, email, password)
        if result.error:
            return result.error
        self._set_user(result.data)
        return None

    def logout(self) -> str | None:
        result = auth_service.logout(self._auth)
        if result.error:
            return result.error
        self._set_user(None)
        return None

    def request_password_reset(self, email: str) -> str | None:
        """Email a reset link landing on the configured redirect."""
        return auth_service.request_password_reset(
            self._auth, email, self._config.password_reset_redirect,
        ).error

    def reset_password(self, password: str, confirm: str) -> str | None:
        try:
            validate_password_reset(password, confirm, self._config.min_password_length)
        except FormValidationError as e:
            return str(e)
        return auth_service.update_password(self._auth, password).error

    # -- internals -----------------------------------------------------------

    def _on_session_change(self, event: str, row: dict[str, Any] | None) -> None:
        logger.debug("Auth state change: %s", event)
        self._set_user(auth_service.to_auth_user(row) if row else None)

    def _set_user(self, user: AuthUser | None) -> None:
        if user == self._user:
            return
        self._user = user
        logger.info("Session user changed: %s", user.email if user else None)
        for callback in list(self._subscribers):
            callback(user)
