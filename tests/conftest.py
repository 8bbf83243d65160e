"""
Shared fixtures for the Finance API tests.

``InMemoryAccountStore`` implements ``AccountStore`` with plain dicts so
the services and the HTTP layer can be exercised without a database.
``sqlite_store`` runs the real engine against a temporary file.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from finance_api.app.api.deps import get_store
from finance_api.app.core.db import init_db
from finance_api.app.core.errors import NotFoundError, PersistenceError
from finance_api.app.main import create_app
from finance_api.app.schemas.account import (
    AccountCreate,
    AccountFilter,
    AccountRead,
    GraphPoint,
    ReportPoint,
)
from finance_api.app.schemas.category import CategoryCreate, CategoryRead
from finance_api.app.services.store import BUCKET_FORMATS, AccountStore, SQLiteAccountStore


class InMemoryAccountStore(AccountStore):
    """Dict‑backed store used as a test double."""

    def __init__(self) -> None:
        self.accounts: Dict[int, AccountRead] = {}
        self.categories: Dict[int, CategoryRead] = {}
        self.fail_writes = False
        self._next_account_id = 1
        self._next_category_id = 1

    def _check_writable(self) -> None:
        if self.fail_writes:
            raise PersistenceError("Failed to write: storage unavailable")

    def add_category(self, category_id: int, type: str, user_id: int = 1) -> CategoryRead:
        category = CategoryRead(id=category_id, user_id=user_id, title=f"Category {category_id}", type=type)
        self.categories[category_id] = category
        self._next_category_id = max(self._next_category_id, category_id + 1)
        return category

    def create_account(self, params: AccountCreate) -> AccountRead:
        self._check_writable()
        if params.category_id not in self.categories:
            raise NotFoundError("category", params.category_id)
        account = AccountRead(id=self._next_account_id, **params.model_dump())
        self.accounts[account.id] = account
        self._next_account_id += 1
        return account.model_copy()

    def get_account(self, account_id: int) -> AccountRead:
        if account_id not in self.accounts:
            raise NotFoundError("account", account_id)
        return self.accounts[account_id].model_copy()

    def get_accounts(self, account_filter: AccountFilter) -> List[AccountRead]:
        criteria = account_filter.model_dump(exclude_none=True)
        matches = [
            account
            for account in self.accounts.values()
            if all(getattr(account, field) == expected for field, expected in criteria.items())
        ]
        matches.sort(key=lambda account: (account.date, account.id))
        return [account.model_copy() for account in matches]

    def update_account(self, account_id: int, title: str, description: str, value: int) -> AccountRead:
        self._check_writable()
        if account_id not in self.accounts:
            raise NotFoundError("account", account_id)
        updated = self.accounts[account_id].model_copy(
            update={"title": title, "description": description, "value": value}
        )
        self.accounts[account_id] = updated
        return updated.model_copy()

    def delete_account(self, account_id: int) -> None:
        self._check_writable()
        if account_id not in self.accounts:
            raise NotFoundError("account", account_id)
        del self.accounts[account_id]

    def get_category(self, category_id: int) -> CategoryRead:
        if category_id not in self.categories:
            raise NotFoundError("category", category_id)
        return self.categories[category_id].model_copy()

    def _buckets(self, user_id: int, type: str, bucket: str) -> Dict[str, List[AccountRead]]:
        fmt = BUCKET_FORMATS[bucket]
        grouped: Dict[str, List[AccountRead]] = {}
        for account in self.accounts.values():
            if account.user_id == user_id and account.type == type:
                grouped.setdefault(account.date.strftime(fmt), []).append(account)
        return dict(sorted(grouped.items()))

    def get_account_graph(self, user_id: int, type: str, bucket: str) -> List[GraphPoint]:
        return [
            GraphPoint(bucket=key, count=len(items))
            for key, items in self._buckets(user_id, type, bucket).items()
        ]

    def get_accounts_reports(self, user_id: int, type: str, bucket: str) -> List[ReportPoint]:
        return [
            ReportPoint(bucket=key, total=sum(item.value for item in items))
            for key, items in self._buckets(user_id, type, bucket).items()
        ]

    def create_category(self, params: CategoryCreate) -> CategoryRead:
        self._check_writable()
        category = CategoryRead(id=self._next_category_id, **params.model_dump())
        self.categories[category.id] = category
        self._next_category_id += 1
        return category.model_copy()

    def get_categories(self, user_id: int, type: Optional[str] = None) -> List[CategoryRead]:
        return [
            category.model_copy()
            for category in sorted(self.categories.values(), key=lambda c: c.id)
            if category.user_id == user_id and (type is None or category.type == type)
        ]


def make_account(**overrides) -> AccountCreate:
    data = {
        "user_id": 1,
        "category_id": 5,
        "title": "Groceries",
        "type": "expense",
        "description": "Weekly shopping",
        "value": -1500,
        "date": datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return AccountCreate(**data)


@pytest.fixture
def memory_store() -> InMemoryAccountStore:
    store = InMemoryAccountStore()
    store.add_category(5, "expense")
    store.add_category(7, "income")
    return store


@pytest.fixture
def client(memory_store):
    app = create_app(run_migrations=False)
    app.dependency_overrides[get_store] = lambda: memory_store
    return TestClient(app)


@pytest.fixture
def sqlite_store(tmp_path) -> SQLiteAccountStore:
    db_path = str(tmp_path / "finance.db")
    init_db(db_path)
    return SQLiteAccountStore(db_path)


@pytest.fixture
def sqlite_client(sqlite_store):
    app = create_app(run_migrations=False)
    app.dependency_overrides[get_store] = lambda: sqlite_store
    return TestClient(app)
