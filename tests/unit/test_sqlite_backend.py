"""Tests for the SQLite table backend."""

from pathlib import Path

import pytest

from careerhub.backend.base import Eq, IsNull
from careerhub.backend.sqlite import SqliteTables, init_db
from careerhub.core.errors import BackendError
from careerhub.core.ids import SequentialIds


@pytest.fixture()
def db():  # type: ignore[no-untyped-def]
    tables = SqliteTables(init_db(":memory:"), SequentialIds("row"))
    yield tables
    tables.close()


def _company(slug: str = "acme", **overrides: object) -> dict:
    row = {"name": "Acme", "slug": slug, "recruiter_id": "u1", "is_published": True}
    row.update(overrides)
    return row


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestInitDb:
    def test_creates_tables(self, tmp_path: Path) -> None:
        conn = init_db(tmp_path / "nested" / "careerhub.db")
        names = {
            r["name"]
            for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        }
        conn.close()
        assert {"companies", "jobs", "content_sections", "faqs"} <= names

    def test_idempotent(self, tmp_path: Path) -> None:
        path = tmp_path / "careerhub.db"
        init_db(path).close()
        conn = init_db(path)
        conn.close()

    def test_open_classmethod(self, tmp_path: Path) -> None:
        tables = SqliteTables.open(tmp_path / "x.db")
        assert tables.select("jobs") == []
        tables.close()


# ---------------------------------------------------------------------------
# Insert / select
# ---------------------------------------------------------------------------


class TestInsert:
    def test_assigns_id_and_timestamps(self, db: SqliteTables) -> None:
        row = db.insert("companies", [_company()])[0]
        assert row["id"] == "row-1"
        assert row["created_at"]
        assert row["updated_at"]

    def test_keeps_supplied_id(self, db: SqliteTables) -> None:
        row = db.insert("companies", [_company(id="c-fixed")])[0]
        assert row["id"] == "c-fixed"

    def test_decodes_booleans(self, db: SqliteTables) -> None:
        row = db.insert("companies", [_company()])[0]
        assert row["is_published"] is True

    def test_applies_column_defaults(self, db: SqliteTables) -> None:
        row = db.insert("companies", [_company()])[0]
        assert row["primary_color"] == "#0066CC"
        assert row["font_family"] == "inter"

    def test_returns_rows_in_input_order(self, db: SqliteTables) -> None:
        rows = db.insert("companies", [_company("a"), _company("b"), _company("c")])
        assert [r["slug"] for r in rows] == ["a", "b", "c"]

    def test_unique_slug(self, db: SqliteTables) -> None:
        db.insert("companies", [_company()])
        with pytest.raises(BackendError, match="UNIQUE constraint failed: companies.slug"):
            db.insert("companies", [_company()])

    def test_failed_batch_rolls_back(self, db: SqliteTables) -> None:
        with pytest.raises(BackendError):
            db.insert("companies", [_company("a"), _company("a")])
        assert db.select("companies") == []

    def test_salary_check_constraint(self, db: SqliteTables) -> None:
        with pytest.raises(BackendError, match="salary_range_valid"):
            db.insert("jobs", [{"company_id": "c", "title": "T", "salary_min": 10, "salary_max": 5}])

    def test_job_type_check(self, db: SqliteTables) -> None:
        with pytest.raises(BackendError):
            db.insert("jobs", [{"company_id": "c", "title": "T", "job_type": "gig"}])

    def test_unknown_column(self, db: SqliteTables) -> None:
        with pytest.raises(BackendError, match="Unknown column 'nope'"):
            db.insert("companies", [_company(nope=1)])

    def test_unknown_table(self, db: SqliteTables) -> None:
        with pytest.raises(BackendError, match="Unknown table 'widgets'"):
            db.select("widgets")

    def test_image_urls_json(self, db: SqliteTables) -> None:
        row = db.insert(
            "content_sections",
            [{"company_id": "c", "type": "life", "image_urls": ["a.png", "b.png"]}],
        )[0]
        assert row["image_urls"] == ["a.png", "b.png"]
        assert row["is_visible"] is True


class TestSelect:
    def test_eq_filter(self, db: SqliteTables) -> None:
        db.insert("companies", [_company("a"), _company("b", is_published=False)])
        rows = db.select("companies", [Eq("is_published", True)])
        assert [r["slug"] for r in rows] == ["a"]

    def test_is_null_filter(self, db: SqliteTables) -> None:
        db.insert("jobs", [
            {"company_id": "c", "title": "Live"},
            {"company_id": "c", "title": "Gone", "deleted_at": "2026-01-01T00:00:00+00:00"},
        ])
        rows = db.select("jobs", [IsNull("deleted_at")])
        assert [r["title"] for r in rows] == ["Live"]

    def test_order_descending_ties_newest_first(self, db: SqliteTables) -> None:
        ts = "2026-01-01T00:00:00+00:00"
        db.insert("jobs", [
            {"company_id": "c", "title": "First", "created_at": ts},
            {"company_id": "c", "title": "Second", "created_at": ts},
        ])
        rows = db.select("jobs", order_by="created_at", ascending=False)
        assert [r["title"] for r in rows] == ["Second", "First"]

    def test_order_ascending(self, db: SqliteTables) -> None:
        db.insert("faqs", [
            {"company_id": "c", "question": "b", "order_index": 1},
            {"company_id": "c", "question": "a", "order_index": 0},
        ])
        rows = db.select("faqs", order_by="order_index")
        assert [r["question"] for r in rows] == ["a", "b"]

    def test_order_by_unknown_column(self, db: SqliteTables) -> None:
        with pytest.raises(BackendError):
            db.select("jobs", order_by="salary")


# ---------------------------------------------------------------------------
# Update / upsert
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_updates_matching_rows(self, db: SqliteTables) -> None:
        job = db.insert("jobs", [{"company_id": "c", "title": "Old"}])[0]
        rows = db.update("jobs", {"title": "New"}, [Eq("id", job["id"])])
        assert rows[0]["title"] == "New"
        assert db.select("jobs")[0]["title"] == "New"

    def test_no_match_returns_empty(self, db: SqliteTables) -> None:
        assert db.update("jobs", {"title": "x"}, [Eq("id", "missing")]) == []

    def test_explicit_none_clears(self, db: SqliteTables) -> None:
        job = db.insert("jobs", [{"company_id": "c", "title": "T", "location": "Remote"}])[0]
        rows = db.update("jobs", {"location": None}, [Eq("id", job["id"])])
        assert rows[0]["location"] is None

    def test_check_violation_raises(self, db: SqliteTables) -> None:
        job = db.insert("jobs", [{"company_id": "c", "title": "T", "salary_max": 5}])[0]
        with pytest.raises(BackendError, match="salary_range_valid"):
            db.update("jobs", {"salary_min": 10}, [Eq("id", job["id"])])


class TestUpsert:
    def test_inserts_new(self, db: SqliteTables) -> None:
        rows = db.upsert("faqs", [{"id": "f1", "company_id": "c", "question": "Q"}])
        assert rows[0]["id"] == "f1"
        assert len(db.select("faqs")) == 1

    def test_updates_existing_keeps_created_at(self, db: SqliteTables) -> None:
        first = db.upsert("faqs", [{"id": "f1", "company_id": "c", "question": "Q"}])[0]
        second = db.upsert("faqs", [{"id": "f1", "company_id": "c", "question": "Q2"}])[0]
        assert second["question"] == "Q2"
        assert second["created_at"] == first["created_at"]
        assert len(db.select("faqs")) == 1

    def test_clears_deleted_at(self, db: SqliteTables) -> None:
        db.upsert("faqs", [{
            "id": "f1", "company_id": "c", "deleted_at": "2026-01-01T00:00:00+00:00",
        }])
        row = db.upsert("faqs", [{"id": "f1", "company_id": "c", "deleted_at": None}])[0]
        assert row["deleted_at"] is None

    def test_on_conflict_other_column(self, db: SqliteTables) -> None:
        original = db.insert("companies", [_company("acme")])[0]
        rows = db.upsert("companies", [_company("acme", name="Acme Corp")], on_conflict="slug")
        assert rows[0]["id"] == original["id"]
        assert rows[0]["name"] == "Acme Corp"
