"""SQLite implementation of the relational storage collaborator.

Mirrors the hosted schema and its constraints so the library and the CLI run
locally: text UUID ids, server-assigned timestamps, ``deleted_at`` columns,
the ``salary_range_valid`` check and a unique company slug.
"""

import json
import logging
import sqlite3
import threading
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from careerhub.backend.base import Eq, IsNull, Predicate, Row, TableBackend
from careerhub.core.errors import BackendError
from careerhub.core.ids import IdGenerator, uuid4_ids

logger = logging.getLogger(__name__)

_COMPANIES_TABLE = """
CREATE TABLE IF NOT EXISTS companies (
    id                        TEXT PRIMARY KEY,
    name                      TEXT NOT NULL,
    slug                      TEXT NOT NULL UNIQUE,
    recruiter_id              TEXT NOT NULL,
    logo_storage_path         TEXT,
    banner_storage_path       TEXT,
    primary_color             TEXT NOT NULL DEFAULT '#0066CC',
    secondary_color           TEXT NOT NULL DEFAULT '#FF6B6B',
    accent_color              TEXT NOT NULL DEFAULT '#FFD93D',
    font_family               TEXT NOT NULL DEFAULT 'inter',
    mission_statement         TEXT,
    culture_video_youtube_url TEXT,
    culture_video_upload_path TEXT,
    culture_video_type        TEXT CHECK (culture_video_type IN ('youtube', 'upload')),
    is_published              INTEGER NOT NULL DEFAULT 0,
    created_by                TEXT,
    created_at                TEXT NOT NULL,
    updated_by                TEXT,
    updated_at                TEXT NOT NULL
);
"""

_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS jobs (
    id                  TEXT PRIMARY KEY,
    company_id          TEXT NOT NULL REFERENCES companies(id),
    title               TEXT NOT NULL,
    description         TEXT NOT NULL DEFAULT '',
    location            TEXT,
    job_type            TEXT NOT NULL DEFAULT 'full-time'
        CHECK (job_type IN ('full-time', 'part-time', 'contract', 'internship')),
    salary_min          REAL,
    salary_max          REAL,
    salary_currency     TEXT,
    salary_period       TEXT CHECK (salary_period IN ('monthly', 'yearly')),
    salary_range_string TEXT,
    experience_level    TEXT NOT NULL DEFAULT 'mid'
        CHECK (experience_level IN ('entry', 'mid', 'senior')),
    status              TEXT NOT NULL DEFAULT 'open'
        CHECK (status IN ('open', 'draft', 'closed')),
    created_by          TEXT,
    created_at          TEXT NOT NULL,
    updated_by          TEXT,
    updated_at          TEXT NOT NULL,
    deleted_at          TEXT,
    is_featured         INTEGER NOT NULL DEFAULT 0,
    CONSTRAINT salary_range_valid CHECK (
        salary_min IS NULL OR salary_max IS NULL OR salary_min <= salary_max
    )
);
"""

_CONTENT_SECTIONS_TABLE = """
CREATE TABLE IF NOT EXISTS content_sections (
    id          TEXT PRIMARY KEY,
    company_id  TEXT NOT NULL REFERENCES companies(id),
    type        TEXT NOT NULL CHECK (type IN ('about', 'mission', 'life', 'perks', 'team')),
    order_index INTEGER NOT NULL DEFAULT 0,
    is_visible  INTEGER NOT NULL DEFAULT 1,
    title       TEXT,
    content     TEXT,
    image_urls  TEXT NOT NULL DEFAULT '[]',
    created_by  TEXT,
    created_at  TEXT NOT NULL,
    updated_by  TEXT,
    updated_at  TEXT NOT NULL,
    deleted_at  TEXT
);
"""

_FAQS_TABLE = """
CREATE TABLE IF NOT EXISTS faqs (
    id          TEXT PRIMARY KEY,
    company_id  TEXT NOT NULL REFERENCES companies(id),
    question    TEXT NOT NULL DEFAULT '',
    answer      TEXT NOT NULL DEFAULT '',
    order_index INTEGER NOT NULL DEFAULT 0,
    created_by  TEXT,
    created_at  TEXT NOT NULL,
    updated_by  TEXT,
    updated_at  TEXT NOT NULL,
    deleted_at  TEXT
);
"""

_SCHEMA = (_COMPANIES_TABLE, _JOBS_TABLE, _CONTENT_SECTIONS_TABLE, _FAQS_TABLE)

_BOOL_COLUMNS = frozenset({"is_published", "is_featured", "is_visible"})
_JSON_COLUMNS = frozenset({"image_urls"})


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database file and tables, returning a connection."""
    path = Path(path)
    if str(path) != ":memory:":
        path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    if str(path) != ":memory:":
        conn.execute("PRAGMA journal_mode=WAL")
    for ddl in _SCHEMA:
        conn.execute(ddl)
    conn.commit()
    return conn


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteTables(TableBackend):
    """``TableBackend`` over a local SQLite connection.

    Safe to call from worker threads (``asyncio.to_thread``); every
    operation holds one lock for its whole read-modify-read cycle.
    """

    def __init__(self, conn: sqlite3.Connection, ids: IdGenerator = uuid4_ids) -> None:
        self._conn = conn
        self._ids = ids
        self._lock = threading.RLock()
        self._columns: dict[str, list[str]] = {}

    @classmethod
    def open(cls, path: str | Path, ids: IdGenerator = uuid4_ids) -> "SqliteTables":
        return cls(init_db(path), ids)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    # -- TableBackend --------------------------------------------------------

    def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order_by: str | None = None,
        ascending: bool = True,
    ) -> list[Row]:
        columns = self._table_columns(table)
        where, params = self._where(columns, filters)
        sql = f"SELECT * FROM {table}{where}"
        if order_by is not None:
            self._check_column(columns, order_by)
            direction = "ASC" if ascending else "DESC"
            sql += f" ORDER BY {order_by} {direction}, rowid {direction}"
        with self._lock:
            rows = self._execute(sql, params).fetchall()
        return [self._decode(row) for row in rows]

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        columns = self._table_columns(table)
        ids: list[str] = []
        with self._lock:
            try:
                for row in rows:
                    prepared = self._prepare_insert(columns, row)
                    names = list(prepared)
                    placeholders = ", ".join("?" for _ in names)
                    self._conn.execute(
                        f"INSERT INTO {table} ({', '.join(names)}) VALUES ({placeholders})",
                        [prepared[n] for n in names],
                    )
                    ids.append(prepared["id"])
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                raise BackendError(str(e)) from e
            return self._fetch_by_ids(table, ids)

    def update(self, table: str, values: Row, filters: Sequence[Predicate]) -> list[Row]:
        columns = self._table_columns(table)
        encoded = self._encode(columns, values)
        if not encoded:
            return self.select(table, filters)
        where, params = self._where(columns, filters)
        assignments = ", ".join(f"{name} = ?" for name in encoded)
        with self._lock:
            matched = [
                r["id"] for r in self._execute(f"SELECT id FROM {table}{where}", params).fetchall()
            ]
            if not matched:
                return []
            try:
                marks = ", ".join("?" for _ in matched)
                self._conn.execute(
                    f"UPDATE {table} SET {assignments} WHERE id IN ({marks})",
                    [*encoded.values(), *matched],
                )
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                raise BackendError(str(e)) from e
            return self._fetch_by_ids(table, matched)

    def upsert(self, table: str, rows: Sequence[Row], on_conflict: str = "id") -> list[Row]:
        columns = self._table_columns(table)
        self._check_column(columns, on_conflict)
        ids: list[str] = []
        with self._lock:
            try:
                for row in rows:
                    prepared = self._prepare_insert(columns, row)
                    names = list(prepared)
                    placeholders = ", ".join("?" for _ in names)
                    # created_at is only ever written by the first insert
                    updates = ", ".join(
                        f"{n} = excluded.{n}"
                        for n in names
                        if n not in (on_conflict, "id", "created_at")
                    )
                    self._conn.execute(
                        f"INSERT INTO {table} ({', '.join(names)}) VALUES ({placeholders}) "
                        f"ON CONFLICT({on_conflict}) DO UPDATE SET {updates}",
                        [prepared[n] for n in names],
                    )
                    ids.append(self._resolve_id(table, on_conflict, prepared))
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                raise BackendError(str(e)) from e
            return self._fetch_by_ids(table, ids)

    # -- helpers -------------------------------------------------------------

    def _execute(self, sql: str, params: Sequence[Any]) -> sqlite3.Cursor:
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            raise BackendError(str(e)) from e

    def _table_columns(self, table: str) -> list[str]:
        with self._lock:
            if table not in self._columns:
                info = self._conn.execute(f"PRAGMA table_info({table})").fetchall()
                if not info:
                    msg = f"Unknown table '{table}'"
                    raise BackendError(msg)
                self._columns[table] = [r["name"] for r in info]
            return self._columns[table]

    @staticmethod
    def _check_column(columns: list[str], name: str) -> None:
        if name not in columns:
            msg = f"Unknown column '{name}'"
            raise BackendError(msg)

    def _where(self, columns: list[str], filters: Sequence[Predicate]) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        for f in filters:
            self._check_column(columns, f.column)
            if isinstance(f, IsNull):
                clauses.append(f"{f.column} IS NULL")
            elif isinstance(f, Eq):
                clauses.append(f"{f.column} = ?")
                params.append(self._encode_value(f.column, f.value))
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def _encode(self, columns: list[str], row: Row) -> Row:
        encoded: Row = {}
        for name, value in row.items():
            self._check_column(columns, name)
            encoded[name] = self._encode_value(name, value)
        return encoded

    @staticmethod
    def _encode_value(name: str, value: Any) -> Any:
        if name in _JSON_COLUMNS:
            return json.dumps(value or [])
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    def _prepare_insert(self, columns: list[str], row: Row) -> Row:
        prepared = self._encode(columns, {k: v for k, v in row.items() if v is not None})
        now = _now_iso()
        prepared.setdefault("id", self._ids())
        if "created_at" in columns:
            prepared.setdefault("created_at", now)
        if "updated_at" in columns:
            prepared["updated_at"] = now
        for name, value in row.items():
            # explicit NULLs matter for upserts (e.g. clearing deleted_at)
            if value is None and name not in prepared:
                prepared[name] = None
        return prepared

    def _resolve_id(self, table: str, on_conflict: str, prepared: Row) -> str:
        if on_conflict == "id":
            return str(prepared["id"])
        row = self._conn.execute(
            f"SELECT id FROM {table} WHERE {on_conflict} = ?", [prepared[on_conflict]],
        ).fetchone()
        return str(row["id"])

    def _fetch_by_ids(self, table: str, ids: list[str]) -> list[Row]:
        if not ids:
            return []
        marks = ", ".join("?" for _ in ids)
        rows = self._execute(f"SELECT * FROM {table} WHERE id IN ({marks})", ids).fetchall()
        by_id = {r["id"]: self._decode(r) for r in rows}
        return [by_id[i] for i in ids if i in by_id]

    @staticmethod
    def _decode(row: sqlite3.Row) -> Row:
        decoded: Row = {}
        for key in row.keys():
            value = row[key]
            if key in _BOOL_COLUMNS and value is not None:
                value = bool(value)
            elif key in _JSON_COLUMNS:
                value = json.loads(value) if value else []
            decoded[key] = value
        return decoded
