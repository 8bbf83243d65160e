"""
Service layer for categories.

Categories are created and listed here; the account service only reads
them back through ``AccountStore.get_category``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from finance_api.app.schemas.category import CategoryCreate, CategoryRead
from finance_api.app.services.account_service import require_id
from finance_api.app.services.store import AccountStore

logger = logging.getLogger(__name__)


class CategoryService:
    """Category operations over an ``AccountStore``."""

    def __init__(self, store: AccountStore) -> None:
        self.store = store

    async def create_category(self, data: CategoryCreate) -> CategoryRead:
        category = self.store.create_category(data)
        logger.info("Created %s category %s for user %s", category.type, category.id, category.user_id)
        return category

    async def get_category(self, category_id: int) -> CategoryRead:
        require_id(category_id, "id")
        return self.store.get_category(category_id)

    async def list_categories(self, user_id: int, type: Optional[str] = None) -> List[CategoryRead]:
        require_id(user_id, "user_id")
        return self.store.get_categories(user_id, type)
