"""Abstract collaborator interfaces for the hosted backend.

Three narrow seams: relational tables, authentication and object storage.
Implementations translate their SDK failures into ``careerhub.core.errors``.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

Row = dict[str, Any]


@dataclass(frozen=True)
class Eq:
    """``column = value`` predicate."""

    column: str
    value: Any


@dataclass(frozen=True)
class IsNull:
    """``column IS NULL`` predicate."""

    column: str


Predicate = Eq | IsNull

# Called with (event, user_row_or_None) whenever the session changes.
SessionCallback = Callable[[str, Row | None], None]


class TableBackend(ABC):
    """Relational storage collaborator (select/insert/update/upsert)."""

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        """Return rows matching every predicate, optionally ordered."""

    @abstractmethod
    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        """Insert rows and return them as stored (ids and timestamps filled)."""

    @abstractmethod
    def update(self, table: str, values: Row, filters: Sequence[Predicate]) -> list[Row]:
        """Apply ``values`` to matching rows and return the updated rows."""

    @abstractmethod
    def upsert(self, table: str, rows: Sequence[Row], on_conflict: str = "id") -> list[Row]:
        """Insert rows, updating in place where ``on_conflict`` matches."""


class AuthBackend(ABC):
    """Hosted auth collaborator. User payloads are plain dicts."""

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Row | None:
        """Create an account; returns the new user (or None if none was created)."""

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> Row | None:
        """Start a session for the given credentials."""

    @abstractmethod
    def sign_out(self) -> None:
        """End the current session."""

    @abstractmethod
    def get_user(self) -> Row | None:
        """Return the signed-in user, or None."""

    @abstractmethod
    def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        """Send a password-reset link that lands on ``redirect_to``."""

    @abstractmethod
    def update_user(self, password: str) -> Row | None:
        """Change the signed-in user's password."""

    @abstractmethod
    def resend(self, type: str, email: str) -> None:
        """Resend a confirmation email (``type`` is e.g. ``"signup"``)."""

    @abstractmethod
    def on_auth_state_change(self, callback: SessionCallback) -> Callable[[], None]:
        """Register a session-change callback; returns an unsubscribe function."""


class ObjectStore(ABC):
    """Hosted blob storage for company assets."""

    @property
    @abstractmethod
    def bucket(self) -> str:
        """Bucket name; public URLs contain ``"<bucket>/<path>"``."""

    @abstractmethod
    def upload(self, path: str, data: bytes, *, cache_control: str, upsert: bool) -> None:
        """Store ``data`` at ``path``."""

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Return the public URL for ``path``."""

    @abstractmethod
    def remove(self, paths: list[str]) -> None:
        """Delete the objects at ``paths``."""
