"""
Pydantic models for account data.

An account is a single income or expense entry owned by a user and
classified by a category.  ``AccountCreate`` is the request body for
creating an entry, ``AccountUpdate`` carries the three mutable fields
and ``AccountRead`` is returned by every endpoint that yields an
account.  ``AccountFilter`` describes a list query and the two point
models describe the bucketed graph and report aggregations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# SQLite stores integers as signed 64‑bit values
MAX_INT = 2**63 - 1


class AccountBase(BaseModel):
    user_id: int = Field(..., gt=0, le=MAX_INT, examples=[1])
    category_id: int = Field(..., gt=0, le=MAX_INT, examples=[5])
    title: str = Field(..., examples=["Groceries"])
    type: str = Field(..., min_length=1, examples=["expense"])
    description: str = Field(..., examples=["Weekly shopping"])
    value: int = Field(
        ..., ge=-MAX_INT, le=MAX_INT, description="Signed amount in minor units", examples=[-1500]
    )
    date: datetime = Field(..., examples=["2024-03-01T10:00:00Z"])


class AccountCreate(AccountBase):
    """Schema for creating an account.  Every field is required."""
    pass


class AccountRead(AccountBase):
    """Schema for reading an account from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class AccountUpdate(BaseModel):
    """Schema for updating an account.

    Unlike most update schemas the three fields are all required: an
    update always overwrites title, description and value together.
    """

    title: str
    description: str
    value: int = Field(..., ge=-MAX_INT, le=MAX_INT)


class AccountFilter(BaseModel):
    """Query descriptor for listing accounts.

    ``user_id`` and ``type`` are mandatory.  The remaining fields are
    optional and, when supplied, must match exactly.
    """

    user_id: int = Field(..., gt=0, le=MAX_INT)
    type: str = Field(..., min_length=1)
    category_id: Optional[int] = Field(None, gt=0, le=MAX_INT)
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None


class GraphPoint(BaseModel):
    """Number of accounts recorded in one time bucket."""

    bucket: str
    count: int


class ReportPoint(BaseModel):
    """Sum of account values recorded in one time bucket."""

    bucket: str
    total: int
