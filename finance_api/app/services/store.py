"""
Persistence boundary for accounts and categories.

``AccountStore`` is the abstract interface the service layer talks to.
``SQLiteAccountStore`` implements it on top of the SQLite database
managed by ``core.db``; tests substitute an in‑memory double without
touching the services.

Every store method either returns its result or raises one of the
errors from ``core.errors``.  A missing record is always reported as
``NotFoundError`` so callers can tell it apart from a genuine storage
failure (``PersistenceError``).
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, List, Optional

from finance_api.app.core.db import get_connection
from finance_api.app.core.errors import MalformedInputError, NotFoundError, PersistenceError
from finance_api.app.schemas.account import (
    AccountCreate,
    AccountFilter,
    AccountRead,
    GraphPoint,
    ReportPoint,
)
from finance_api.app.schemas.category import CategoryCreate, CategoryRead

logger = logging.getLogger(__name__)

# strftime patterns used to group ``accounts.date`` into buckets
BUCKET_FORMATS = {
    "day": "%Y-%m-%d",
    "month": "%Y-%m",
}


class AccountStore(ABC):
    """Abstract interface for account and category storage.

    Implementations must guarantee that each mutating call is applied
    completely or not at all.  No locking or cross‑call transactions
    are expected.
    """

    @abstractmethod
    def create_account(self, params: AccountCreate) -> AccountRead:
        """Insert a new account and return it with its assigned id.

        Raises
        ------
        NotFoundError
            If the referenced category no longer exists.
        PersistenceError
            If the insert fails for any other reason.
        """

    @abstractmethod
    def get_account(self, account_id: int) -> AccountRead:
        """Return the account with the given id or raise ``NotFoundError``."""

    @abstractmethod
    def get_accounts(self, account_filter: AccountFilter) -> List[AccountRead]:
        """Return accounts matching every supplied field of ``account_filter``.

        Optional fields left as ``None`` impose no constraint.  Results are
        ordered by date, then id.
        """

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        title: str,
        description: str,
        value: int,
    ) -> AccountRead:
        """Overwrite title, description and value of an account.

        Raises ``NotFoundError`` if the account does not exist.
        """

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account, raising ``NotFoundError`` if it does not exist."""

    @abstractmethod
    def get_category(self, category_id: int) -> CategoryRead:
        """Return the category with the given id or raise ``NotFoundError``."""

    @abstractmethod
    def get_account_graph(self, user_id: int, type: str, bucket: str) -> List[GraphPoint]:
        """Count accounts of ``user_id``/``type`` per time bucket, oldest first."""

    @abstractmethod
    def get_accounts_reports(self, user_id: int, type: str, bucket: str) -> List[ReportPoint]:
        """Sum account values of ``user_id``/``type`` per time bucket, oldest first."""

    @abstractmethod
    def create_category(self, params: CategoryCreate) -> CategoryRead:
        """Insert a new category and return it."""

    @abstractmethod
    def get_categories(self, user_id: int, type: Optional[str] = None) -> List[CategoryRead]:
        """Return the categories of a user, optionally restricted to one type."""


class SQLiteAccountStore(AccountStore):
    """``AccountStore`` backed by the SQLite database from ``core.db``.

    A new connection is opened for every call and closed afterwards.
    Changes are committed only when the call completes, so a failing
    call leaves the database untouched.
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path

    @contextmanager
    def _connection(self, action: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = get_connection(self.db_path)
        except sqlite3.Error as exc:
            logger.error("Cannot open database to %s: %s", action, exc)
            raise PersistenceError(f"Failed to {action}: {exc}") from exc
        try:
            yield conn
            conn.commit()
        except OverflowError as exc:
            # integer parameter outside SQLite's signed 64‑bit range
            raise MalformedInputError(f"Failed to {action}: {exc}") from exc
        except sqlite3.Error as exc:
            logger.error("Database error while trying to %s: %s", action, exc)
            raise PersistenceError(f"Failed to {action}: {exc}") from exc
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def create_account(self, params: AccountCreate) -> AccountRead:
        with self._connection("create account") as conn:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO accounts (user_id, category_id, title, type, description, value, date)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        params.user_id,
                        params.category_id,
                        params.title,
                        params.type,
                        params.description,
                        params.value,
                        _to_storage_date(params.date),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                if "FOREIGN KEY" not in str(exc):
                    raise
                # the category was removed after it was looked up
                raise NotFoundError("category", params.category_id) from exc
            row = self._fetch_account(conn, cursor.lastrowid)
        return self._row_to_account(row)

    def get_account(self, account_id: int) -> AccountRead:
        with self._connection("get account") as conn:
            row = self._fetch_account(conn, account_id)
        if row is None:
            raise NotFoundError("account", account_id)
        return self._row_to_account(row)

    def get_accounts(self, account_filter: AccountFilter) -> List[AccountRead]:
        where_clauses = ["user_id = ?", "type = ?"]
        params: list[Any] = [account_filter.user_id, account_filter.type]
        if account_filter.category_id is not None:
            where_clauses.append("category_id = ?")
            params.append(account_filter.category_id)
        if account_filter.title is not None:
            where_clauses.append("title = ?")
            params.append(account_filter.title)
        if account_filter.description is not None:
            where_clauses.append("description = ?")
            params.append(account_filter.description)
        if account_filter.date is not None:
            where_clauses.append("date = ?")
            params.append(_to_storage_date(account_filter.date))
        query = (
            "SELECT * FROM accounts WHERE "
            + " AND ".join(where_clauses)
            + " ORDER BY date ASC, id ASC"
        )
        with self._connection("list accounts") as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_account(row) for row in rows]

    def update_account(
        self,
        account_id: int,
        title: str,
        description: str,
        value: int,
    ) -> AccountRead:
        with self._connection("update account") as conn:
            cursor = conn.execute(
                "UPDATE accounts SET title = ?, description = ?, value = ? WHERE id = ?",
                (title, description, value, account_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("account", account_id)
            row = self._fetch_account(conn, account_id)
        return self._row_to_account(row)

    def delete_account(self, account_id: int) -> None:
        with self._connection("delete account") as conn:
            cursor = conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("account", account_id)

    # ------------------------------------------------------------------
    # Aggregations
    # ------------------------------------------------------------------
    def get_account_graph(self, user_id: int, type: str, bucket: str) -> List[GraphPoint]:
        rows = self._aggregate("COUNT(*)", user_id, type, bucket)
        return [GraphPoint(bucket=row["bucket"], count=row["amount"]) for row in rows]

    def get_accounts_reports(self, user_id: int, type: str, bucket: str) -> List[ReportPoint]:
        rows = self._aggregate("COALESCE(SUM(value), 0)", user_id, type, bucket)
        return [ReportPoint(bucket=row["bucket"], total=row["amount"]) for row in rows]

    def _aggregate(self, expression: str, user_id: int, type: str, bucket: str) -> List[sqlite3.Row]:
        group_field = f"strftime('{BUCKET_FORMATS.get(bucket, BUCKET_FORMATS['day'])}', date)"
        query = (
            f"SELECT {group_field} as bucket, {expression} as amount FROM accounts "
            f"WHERE user_id = ? AND type = ? GROUP BY {group_field} ORDER BY {group_field} ASC"
        )
        with self._connection("aggregate accounts") as conn:
            return conn.execute(query, (user_id, type)).fetchall()

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------
    def get_category(self, category_id: int) -> CategoryRead:
        with self._connection("get category") as conn:
            row = conn.execute(
                "SELECT * FROM categories WHERE id = ?", (category_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError("category", category_id)
        return self._row_to_category(row)

    def create_category(self, params: CategoryCreate) -> CategoryRead:
        with self._connection("create category") as conn:
            cursor = conn.execute(
                "INSERT INTO categories (user_id, title, type, description) VALUES (?, ?, ?, ?)",
                (params.user_id, params.title, params.type, params.description),
            )
            row = conn.execute(
                "SELECT * FROM categories WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        return self._row_to_category(row)

    def get_categories(self, user_id: int, type: Optional[str] = None) -> List[CategoryRead]:
        query = "SELECT * FROM categories WHERE user_id = ?"
        params: list[Any] = [user_id]
        if type is not None:
            query += " AND type = ?"
            params.append(type)
        query += " ORDER BY id ASC"
        with self._connection("list categories") as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_category(row) for row in rows]

    # ------------------------------------------------------------------
    # Row helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _fetch_account(conn: sqlite3.Connection, account_id: int) -> Optional[sqlite3.Row]:
        return conn.execute("SELECT * FROM accounts WHERE id = ?", (account_id,)).fetchone()

    @staticmethod
    def _row_to_account(row: sqlite3.Row) -> AccountRead:
        """Convert a database row to an ``AccountRead`` instance."""
        return AccountRead(
            id=row["id"],
            user_id=row["user_id"],
            category_id=row["category_id"],
            title=row["title"],
            type=row["type"],
            description=row["description"],
            value=row["value"],
            date=row["date"],
        )

    @staticmethod
    def _row_to_category(row: sqlite3.Row) -> CategoryRead:
        return CategoryRead(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            type=row["type"],
            description=row["description"],
        )


def _to_storage_date(value: datetime) -> str:
    """Render a date the way it is stored: aware values normalised to UTC.

    Equal instants then compare and sort equal as text regardless of the
    offset they were submitted with.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.isoformat()
