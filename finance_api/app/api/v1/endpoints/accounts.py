"""
Account endpoints for API v1.

Each route binds its path, query or body parameters and passes them to
``AccountService``.  Errors raised by the service are not caught here;
the exception handlers installed by ``create_app`` translate them into
HTTP responses.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from finance_api.app.api.deps import get_account_service
from finance_api.app.schemas.account import (
    AccountCreate,
    AccountFilter,
    AccountRead,
    AccountUpdate,
    GraphPoint,
    MAX_INT,
    ReportPoint,
)
from finance_api.app.services.account_service import AccountService

router = APIRouter()


@router.post("", response_model=AccountRead)
async def create_account(
    account_in: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountRead:
    """Create an account.

    The referenced category must exist (404 otherwise) and its type must
    equal the account type (400 otherwise).
    """
    return await service.create_account(account_in)


@router.get("", response_model=List[AccountRead])
async def list_accounts(
    user_id: int = Query(..., gt=0, le=MAX_INT),
    type: str = Query(..., min_length=1),
    category_id: Optional[int] = Query(None, gt=0, le=MAX_INT),
    title: Optional[str] = Query(None),
    description: Optional[str] = Query(None),
    date: Optional[datetime] = Query(None),
    service: AccountService = Depends(get_account_service),
) -> List[AccountRead]:
    """List the accounts of a user and type.

    ``category_id``, ``title``, ``description`` and ``date`` narrow the
    result to exact matches when supplied.
    """
    account_filter = AccountFilter(
        user_id=user_id,
        type=type,
        category_id=category_id,
        title=title,
        description=description,
        date=date,
    )
    return await service.list_accounts(account_filter)


@router.get("/graph/{user_id}/{type}", response_model=List[GraphPoint])
async def get_account_graph(
    user_id: int,
    type: str,
    group_by: Optional[str] = Query(None, description="Bucket size: day or month"),
    service: AccountService = Depends(get_account_service),
) -> List[GraphPoint]:
    """Number of accounts per time bucket for a user and type."""
    return await service.get_account_graph(user_id, type, group_by)


@router.get("/reports/{user_id}/{type}", response_model=List[ReportPoint])
async def get_account_reports(
    user_id: int,
    type: str,
    group_by: Optional[str] = Query(None, description="Bucket size: day or month"),
    service: AccountService = Depends(get_account_service),
) -> List[ReportPoint]:
    """Sum of account values per time bucket for a user and type."""
    return await service.get_accounts_reports(user_id, type, group_by)


@router.get("/{account_id}", response_model=AccountRead)
async def get_account(
    account_id: int,
    service: AccountService = Depends(get_account_service),
) -> AccountRead:
    return await service.get_account(account_id)


@router.put("/{account_id}", response_model=AccountRead)
async def update_account(
    account_id: int,
    updates: AccountUpdate,
    service: AccountService = Depends(get_account_service),
) -> AccountRead:
    """Overwrite title, description and value of an account."""
    return await service.update_account(
        account_id,
        title=updates.title,
        description=updates.description,
        value=updates.value,
    )


@router.delete("/{account_id}", response_model=bool)
async def delete_account(
    account_id: int,
    service: AccountService = Depends(get_account_service),
) -> bool:
    """Delete an account.  Responds with ``true`` on success."""
    return await service.delete_account(account_id)
