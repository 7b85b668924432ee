"""Table repository that owns the soft-delete convention.

Every read through a soft-deleting repository carries ``deleted_at IS NULL``,
and deletes stamp ``deleted_at`` instead of removing the row.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from careerhub.backend.base import Eq, IsNull, Predicate, Row, TableBackend
from careerhub.core.errors import NotFoundError

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Repository:
    """Thin wrapper around one table of a ``TableBackend``.

    Usage::

        jobs = Repository(backend, "jobs")
        rows = jobs.find(Eq("company_id", cid), order_by="created_at", ascending=False)
        jobs.soft_delete(Eq("id", job_id))
    """

    def __init__(self, backend: TableBackend, table: str, *, soft_delete: bool = True) -> None:
        self._backend = backend
        self._table = table
        self._soft_delete = soft_delete

    @property
    def table(self) -> str:
        return self._table

    def _scoped(self, filters: Sequence[Predicate], include_deleted: bool) -> list[Predicate]:
        scoped = list(filters)
        if self._soft_delete and not include_deleted:
            scoped.append(IsNull("deleted_at"))
        return scoped

    def find(
        self,
        *filters: Predicate,
        order_by: str | None = None,
        ascending: bool = True,
        include_deleted: bool = False,
    ) -> list[Row]:
        """Return live rows matching every predicate."""
        return self._backend.select(
            self._table,
            self._scoped(filters, include_deleted),
            order_by=order_by,
            ascending=ascending,
        )

    def get_one(self, *filters: Predicate) -> Row:
        """Return exactly one live row or raise NotFoundError."""
        rows = self.find(*filters)
        if not rows:
            msg = f"No {self._table} row matches {_describe(filters)}"
            raise NotFoundError(msg)
        return rows[0]

    def insert(self, rows: Sequence[Row]) -> list[Row]:
        return self._backend.insert(self._table, rows)

    def insert_one(self, row: Row) -> Row:
        return self.insert([row])[0]

    def update(self, values: Row, *filters: Predicate) -> list[Row]:
        """Update live rows, stamping ``updated_at``."""
        stamped = {**values, "updated_at": utc_now_iso()}
        return self._backend.update(self._table, stamped, self._scoped(filters, False))

    def update_one(self, values: Row, *filters: Predicate) -> Row:
        rows = self.update(values, *filters)
        if not rows:
            msg = f"No {self._table} row matches {_describe(filters)}"
            raise NotFoundError(msg)
        return rows[0]

    def upsert(self, rows: Sequence[Row], on_conflict: str = "id") -> list[Row]:
        return self._backend.upsert(self._table, rows, on_conflict=on_conflict)

    def soft_delete(self, *filters: Predicate) -> Row:
        """Mark one live row deleted and return it; the row is retained."""
        if not self._soft_delete:
            msg = f"Table '{self._table}' does not support soft delete"
            raise ValueError(msg)
        rows = self._backend.update(
            self._table,
            {"deleted_at": utc_now_iso()},
            self._scoped(filters, False),
        )
        if not rows:
            msg = f"No {self._table} row matches {_describe(filters)}"
            raise NotFoundError(msg)
        logger.debug("Soft-deleted %s row %s", self._table, rows[0].get("id"))
        return rows[0]


def by_id(row_id: str) -> Eq:
    return Eq("id", row_id)


def _describe(filters: Sequence[Predicate]) -> str:
    parts = []
    for f in filters:
        if isinstance(f, Eq):
            parts.append(f"{f.column}={f.value!r}")
        else:
            parts.append(f"{f.column} IS NULL")
    return ", ".join(parts) or "<all>"
