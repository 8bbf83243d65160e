"""
Category endpoints for API v1.

Categories must exist before accounts can be filed under them; these
routes create, fetch and list them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from finance_api.app.api.deps import get_category_service
from finance_api.app.schemas.account import MAX_INT
from finance_api.app.schemas.category import CategoryCreate, CategoryRead
from finance_api.app.services.category_service import CategoryService

router = APIRouter()


@router.post("", response_model=CategoryRead)
async def create_category(
    category_in: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryRead:
    return await service.create_category(category_in)


@router.get("", response_model=List[CategoryRead])
async def list_categories(
    user_id: int = Query(..., gt=0, le=MAX_INT),
    type: Optional[str] = Query(None),
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryRead]:
    """List the categories of a user, optionally filtered by type."""
    return await service.list_categories(user_id, type)


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> CategoryRead:
    return await service.get_category(category_id)
