"""
Service layer for accounts.

``AccountService`` sits between the HTTP handlers and an
``AccountStore``.  Creating an account is a short pipeline: look up the
category, check that the requested type matches it, then persist.  The
first failing step raises and nothing after it runs, so a missing
category or a type mismatch never reaches the store.

The remaining operations check the shape of their input and hand the
call to the store in a single step.  Errors from the store propagate
unchanged; the transport layer maps them to status codes.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from finance_api.app.core.config import settings
from finance_api.app.core.errors import MalformedInputError
from finance_api.app.schemas.account import (
    AccountCreate,
    AccountFilter,
    AccountRead,
    MAX_INT,
    GraphPoint,
    ReportPoint,
)
from finance_api.app.services.store import BUCKET_FORMATS, AccountStore
from finance_api.app.services.validator import validate_account_type

logger = logging.getLogger(__name__)


class AccountService:
    """Orchestrates account operations over an ``AccountStore``."""

    def __init__(self, store: AccountStore) -> None:
        self.store = store

    async def create_account(self, data: AccountCreate) -> AccountRead:
        """Validate an account against its category and persist it.

        Raises
        ------
        NotFoundError
            The referenced category does not exist.
        TypeMismatchError
            ``data.type`` differs from the category type.
        PersistenceError
            The store failed to insert the account.
        """
        require_id(data.category_id, "category_id")
        category = self.store.get_category(data.category_id)
        validate_account_type(category, data.type)
        account = self.store.create_account(data)
        logger.info(
            "Created %s account %s for user %s in category %s",
            account.type,
            account.id,
            account.user_id,
            account.category_id,
        )
        return account

    async def get_account(self, account_id: int) -> AccountRead:
        require_id(account_id, "id")
        return self.store.get_account(account_id)

    async def list_accounts(self, account_filter: AccountFilter) -> List[AccountRead]:
        require_id(account_filter.user_id, "user_id")
        _require_type(account_filter.type)
        return self.store.get_accounts(account_filter)

    async def update_account(
        self,
        account_id: int,
        title: str,
        description: str,
        value: int,
    ) -> AccountRead:
        """Overwrite the mutable fields of an account.

        ``user_id``, ``category_id``, ``type`` and ``date`` are never
        touched.  All three values are written even if unchanged.
        """
        require_id(account_id, "id")
        account = self.store.update_account(account_id, title, description, value)
        logger.info("Updated account %s", account_id)
        return account

    async def delete_account(self, account_id: int) -> bool:
        require_id(account_id, "id")
        self.store.delete_account(account_id)
        logger.info("Deleted account %s", account_id)
        return True

    async def get_account_graph(
        self, user_id: int, type: str, group_by: Optional[str] = None
    ) -> List[GraphPoint]:
        """Return the number of accounts per time bucket."""
        require_id(user_id, "user_id")
        _require_type(type)
        return self.store.get_account_graph(user_id, type, _resolve_bucket(group_by))

    async def get_accounts_reports(
        self, user_id: int, type: str, group_by: Optional[str] = None
    ) -> List[ReportPoint]:
        """Return the sum of account values per time bucket."""
        require_id(user_id, "user_id")
        _require_type(type)
        return self.store.get_accounts_reports(user_id, type, _resolve_bucket(group_by))


def require_id(value: int, name: str) -> None:
    """Reject ids that are not positive or do not fit a 64‑bit column."""
    if value is None or not 0 < value <= MAX_INT:
        raise MalformedInputError(f"{name} must be a positive 64-bit integer")


def _require_type(value: str) -> None:
    if not value:
        raise MalformedInputError("type must not be empty")


def _resolve_bucket(group_by: Optional[str]) -> str:
    """Pick the aggregation bucket, falling back to the configured default."""
    bucket = (group_by or settings.report_bucket).lower()
    if bucket not in BUCKET_FORMATS:
        bucket = "day"
    return bucket
