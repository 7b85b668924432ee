"""Supabase implementations of the three collaborator interfaces."""

import logging
import mimetypes
from collections.abc import Callable, Sequence
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client
from supabase_auth.errors import AuthError

from careerhub.backend.base import (
    AuthBackend,
    Eq,
    IsNull,
    ObjectStore,
    Predicate,
    Row,
    SessionCallback,
    TableBackend,
)
from careerhub.core.config import BackendConfig
from careerhub.core.errors import AuthenticationError, BackendError, ObjectStorageError

logger = logging.getLogger(__name__)


def create_supabase_client(config: BackendConfig) -> Client:
    """Create a Supabase client from backend config."""
    if not config.supabase_url or not config.supabase_key:
        msg = "supabase_url and supabase_key are required for the supabase backend"
        raise ValueError(msg)
    return create_client(config.supabase_url, config.supabase_key)


def _user_row(user: Any) -> Row | None:
    if user is None:
        return None
    if hasattr(user, "model_dump"):
        return user.model_dump(mode="json")
    return dict(user)


class SupabaseTables(TableBackend):
    """PostgREST query builder behind the ``TableBackend`` interface."""

    def __init__(self, client: Client) -> None:
        self._client = client

    @staticmethod
    def _apply(query: Any, filters: Sequence[Predicate]) -> Any:
        for f in filters:
            if isinstance(f, IsNull):
                query = query.is_(f.column, "null")
            elif isinstance(f, Eq):
                query = query.eq(f.column, f.value)
        return query

    @staticmethod
    def _run(query: Any, action: str, table: str) -> list[Row]:
        try:
            response = query.execute()
        except APIError as e:
            msg = e.message or str(e)
            logger.debug("Supabase %s on %s failed: %s", action, table, msg)
            raise BackendError(msg) from e
        except httpx.HTTPError as e:
            logger.debug("Supabase %s on %s failed: %s", action, table, e)
            raise BackendError(str(e) or type(e).__name__) from e
        return list(response.data or [])

    def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        query = self._apply(self._client.table(table).select("*"), filters)
        if order_by is not None:
            query = query.order(order_by, desc=not ascending)
        return self._run(query, "select", table)

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        return self._run(self._client.table(table).insert(list(rows)), "insert", table)

    def update(self, table: str, values: Row, filters: Sequence[Predicate]) -> list[Row]:
        query = self._apply(self._client.table(table).update(values), filters)
        return self._run(query, "update", table)

    def upsert(self, table: str, rows: Sequence[Row], on_conflict: str = "id") -> list[Row]:
        query = self._client.table(table).upsert(list(rows), on_conflict=on_conflict)
        return self._run(query, "upsert", table)


class SupabaseAuth(AuthBackend):
    """Supabase auth client behind the ``AuthBackend`` interface."""

    def __init__(self, client: Client) -> None:
        self._auth = client.auth

    def _call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except AuthError as e:
            raise AuthenticationError(e.message) from e
        except httpx.HTTPError as e:
            raise AuthenticationError(str(e) or type(e).__name__) from e

    def sign_up(self, email: str, password: str) -> Row | None:
        response = self._call(self._auth.sign_up, {"email": email, "password": password})
        return _user_row(response.user)

    def sign_in_with_password(self, email: str, password: str) -> Row | None:
        response = self._call(
            self._auth.sign_in_with_password, {"email": email, "password": password},
        )
        return _user_row(response.user)

    def sign_out(self) -> None:
        self._call(self._auth.sign_out)

    def get_user(self) -> Row | None:
        response = self._call(self._auth.get_user)
        if response is None:
            return None
        return _user_row(response.user)

    def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        self._call(self._auth.reset_password_for_email, email, {"redirect_to": redirect_to})

    def update_user(self, password: str) -> Row | None:
        response = self._call(self._auth.update_user, {"password": password})
        return _user_row(response.user)

    def resend(self, type: str, email: str) -> None:
        self._call(self._auth.resend, {"type": type, "email": email})

    def on_auth_state_change(self, callback: SessionCallback) -> Callable[[], None]:
        def _listener(event: Any, session: Any) -> None:
            user = getattr(session, "user", None) if session is not None else None
            callback(str(event), _user_row(user))

        subscription = self._auth.on_auth_state_change(_listener)
        return subscription.unsubscribe


class SupabaseObjectStore(ObjectStore):
    """One Supabase storage bucket."""

    def __init__(self, client: Client, bucket: str = "company-assets") -> None:
        self._client = client
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload(self, path: str, data: bytes, *, cache_control: str, upsert: bool) -> None:
        content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
        options = {
            "cache-control": cache_control,
            "content-type": content_type,
            "upsert": "true" if upsert else "false",
        }
        try:
            self._client.storage.from_(self._bucket).upload(path, data, file_options=options)
        except Exception as e:
            raise ObjectStorageError(str(e)) from e

    def get_public_url(self, path: str) -> str:
        return self._client.storage.from_(self._bucket).get_public_url(path)

    def remove(self, paths: list[str]) -> None:
        try:
            self._client.storage.from_(self._bucket).remove(paths)
        except Exception as e:
            raise ObjectStorageError(str(e)) from e
