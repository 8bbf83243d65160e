"""
FastAPI dependencies shared by the v1 endpoints.

The store is created once per process and handed to the services on
each request.  Tests replace ``get_store`` through
``app.dependency_overrides`` to run the API against an in‑memory
double.
"""

from functools import lru_cache

from fastapi import Depends

from finance_api.app.services.account_service import AccountService
from finance_api.app.services.category_service import CategoryService
from finance_api.app.services.store import AccountStore, SQLiteAccountStore


@lru_cache(maxsize=1)
def get_store() -> AccountStore:
    return SQLiteAccountStore()


def get_account_service(store: AccountStore = Depends(get_store)) -> AccountService:
    return AccountService(store)


def get_category_service(store: AccountStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)
