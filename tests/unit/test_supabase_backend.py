"""Tests for the Supabase collaborators against a mocked client."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from postgrest.exceptions import APIError
from supabase_auth.errors import AuthError

from careerhub.backend.base import Eq, IsNull
from careerhub.backend.supabase import (
    SupabaseAuth,
    SupabaseObjectStore,
    SupabaseTables,
    create_supabase_client,
)
from careerhub.core.config import BackendConfig
from careerhub.core.errors import AuthenticationError, BackendError, ObjectStorageError
from careerhub.services import job_service


def _client_with_query(data: list | None = None) -> tuple[MagicMock, MagicMock]:
    """Client whose table() returns a chainable query builder."""
    query = MagicMock()
    for name in ("select", "eq", "is_", "order", "insert", "update", "upsert"):
        getattr(query, name).return_value = query
    query.execute.return_value.data = data if data is not None else []
    client = MagicMock()
    client.table.return_value = query
    return client, query


def _api_error(message: str) -> APIError:
    return APIError({"message": message, "code": "23514", "hint": None, "details": None})


# ---------------------------------------------------------------------------
# Client factory
# ---------------------------------------------------------------------------


class TestCreateClient:
    def test_requires_credentials(self) -> None:
        with pytest.raises(ValueError, match="supabase_url and supabase_key"):
            create_supabase_client(BackendConfig(provider="supabase"))

    def test_passes_credentials(self) -> None:
        config = BackendConfig(provider="supabase", supabase_url="https://x.supabase.co", supabase_key="k")
        with patch("careerhub.backend.supabase.create_client") as create:
            create_supabase_client(config)
        create.assert_called_once_with("https://x.supabase.co", "k")


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestSupabaseTables:
    def test_select_builds_query(self) -> None:
        client, query = _client_with_query([{"id": "j1"}])
        rows = SupabaseTables(client).select(
            "jobs", [Eq("company_id", "c1"), IsNull("deleted_at")],
            order_by="created_at", ascending=False,
        )
        assert rows == [{"id": "j1"}]
        client.table.assert_called_once_with("jobs")
        query.select.assert_called_once_with("*")
        query.eq.assert_called_once_with("company_id", "c1")
        query.is_.assert_called_once_with("deleted_at", "null")
        query.order.assert_called_once_with("created_at", desc=True)

    def test_select_without_order(self) -> None:
        client, query = _client_with_query()
        SupabaseTables(client).select("companies")
        query.order.assert_not_called()

    def test_insert(self) -> None:
        client, query = _client_with_query([{"id": "j1"}])
        SupabaseTables(client).insert("jobs", ({"title": "T"},))
        query.insert.assert_called_once_with([{"title": "T"}])

    def test_update_applies_filters(self) -> None:
        client, query = _client_with_query([{"id": "j1"}])
        SupabaseTables(client).update("jobs", {"status": "closed"}, [Eq("id", "j1")])
        query.update.assert_called_once_with({"status": "closed"})
        query.eq.assert_called_once_with("id", "j1")

    def test_upsert_on_conflict(self) -> None:
        client, query = _client_with_query([])
        SupabaseTables(client).upsert("faqs", [{"id": "f1"}], on_conflict="id")
        query.upsert.assert_called_once_with([{"id": "f1"}], on_conflict="id")

    def test_none_data_is_empty(self) -> None:
        client, query = _client_with_query()
        query.execute.return_value.data = None
        assert SupabaseTables(client).select("jobs") == []

    def test_api_error_mapped(self) -> None:
        client, query = _client_with_query()
        query.execute.side_effect = _api_error(
            'new row for relation "jobs" violates check constraint "salary_range_valid"',
        )
        with pytest.raises(BackendError, match="salary_range_valid"):
            SupabaseTables(client).insert("jobs", [{"title": "T"}])

    def test_transport_error_mapped(self) -> None:
        client, query = _client_with_query()
        query.execute.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(BackendError, match="connection refused"):
            SupabaseTables(client).select("jobs")

    def test_timeout_becomes_service_error(self) -> None:
        client, query = _client_with_query()
        query.execute.side_effect = httpx.ReadTimeout("timed out")
        result = job_service.get_jobs(SupabaseTables(client))
        assert result.data is None
        assert result.error == "timed out"


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def _user(**fields: object) -> MagicMock:
    user = MagicMock()
    user.model_dump.return_value = {"id": "u1", "email": "a@b.co", **fields}
    return user


class TestSupabaseAuth:
    def test_sign_up(self) -> None:
        client = MagicMock()
        client.auth.sign_up.return_value.user = _user()
        row = SupabaseAuth(client).sign_up("a@b.co", "Secret123")
        assert row == {"id": "u1", "email": "a@b.co"}
        client.auth.sign_up.assert_called_once_with({"email": "a@b.co", "password": "Secret123"})

    def test_sign_up_without_user(self) -> None:
        client = MagicMock()
        client.auth.sign_up.return_value.user = None
        assert SupabaseAuth(client).sign_up("a@b.co", "Secret123") is None

    def test_auth_error_mapped(self) -> None:
        client = MagicMock()
        client.auth.sign_in_with_password.side_effect = AuthError("Invalid login credentials", None)
        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            SupabaseAuth(client).sign_in_with_password("a@b.co", "bad")

    def test_transport_error_mapped(self) -> None:
        client = MagicMock()
        client.auth.get_user.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(AuthenticationError, match="connection refused"):
            SupabaseAuth(client).get_user()

    def test_get_user_none_response(self) -> None:
        client = MagicMock()
        client.auth.get_user.return_value = None
        assert SupabaseAuth(client).get_user() is None

    def test_reset_password_redirect(self) -> None:
        client = MagicMock()
        SupabaseAuth(client).reset_password_for_email("a@b.co", "https://app/reset-password")
        client.auth.reset_password_for_email.assert_called_once_with(
            "a@b.co", {"redirect_to": "https://app/reset-password"},
        )

    def test_update_user_and_resend(self) -> None:
        client = MagicMock()
        client.auth.update_user.return_value.user = _user()
        auth = SupabaseAuth(client)
        assert auth.update_user("NewSecret1") == {"id": "u1", "email": "a@b.co"}
        auth.resend("signup", "a@b.co")
        client.auth.update_user.assert_called_once_with({"password": "NewSecret1"})
        client.auth.resend.assert_called_once_with({"type": "signup", "email": "a@b.co"})

    def test_state_change_listener(self) -> None:
        client = MagicMock()
        events: list[tuple] = []
        unsubscribe = SupabaseAuth(client).on_auth_state_change(
            lambda event, row: events.append((event, row)),
        )
        listener = client.auth.on_auth_state_change.call_args.args[0]
        session = MagicMock()
        session.user = _user()
        listener("SIGNED_IN", session)
        listener("SIGNED_OUT", None)
        assert events == [("SIGNED_IN", {"id": "u1", "email": "a@b.co"}), ("SIGNED_OUT", None)]
        assert unsubscribe is client.auth.on_auth_state_change.return_value.unsubscribe


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class TestSupabaseObjectStore:
    def test_upload_options(self) -> None:
        client = MagicMock()
        SupabaseObjectStore(client).upload("c1/logo/a.png", b"x", cache_control="3600", upsert=True)
        client.storage.from_.assert_called_with("company-assets")
        client.storage.from_.return_value.upload.assert_called_once_with(
            "c1/logo/a.png", b"x",
            file_options={"cache-control": "3600", "content-type": "image/png", "upsert": "true"},
        )

    def test_upload_failure(self) -> None:
        client = MagicMock()
        client.storage.from_.return_value.upload.side_effect = RuntimeError("Payload too large")
        with pytest.raises(ObjectStorageError, match="Payload too large"):
            SupabaseObjectStore(client).upload("p", b"x", cache_control="3600", upsert=False)

    @pytest.mark.parametrize(
        ("path", "content_type"),
        [
            ("c1/banner/b.jpg", "image/jpeg"),
            ("c1/video/v.mp4", "video/mp4"),
            ("c1/logo/noext", "application/octet-stream"),
        ],
    )
    def test_upload_content_type(self, path: str, content_type: str) -> None:
        client = MagicMock()
        SupabaseObjectStore(client).upload(path, b"x", cache_control="3600", upsert=True)
        options = client.storage.from_.return_value.upload.call_args.kwargs["file_options"]
        assert options["content-type"] == content_type

    def test_public_url_and_remove(self) -> None:
        client = MagicMock()
        bucket = client.storage.from_.return_value
        bucket.get_public_url.return_value = "https://x/company-assets/p"
        store = SupabaseObjectStore(client, "company-assets")
        assert store.get_public_url("p") == "https://x/company-assets/p"
        store.remove(["p"])
        bucket.remove.assert_called_once_with(["p"])
        assert store.bucket == "company-assets"
