"""
Pydantic schemas for categories.

Categories classify accounts.  The account core only reads ``id`` and
``type`` of a category, to check that a new account carries the same
type as the category it references.
"""

from pydantic import BaseModel, Field

from .account import MAX_INT


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""

    user_id: int = Field(..., gt=0, le=MAX_INT)
    title: str = Field(..., examples=["Salary"])
    type: str = Field(..., min_length=1, examples=["income"])
    description: str = Field("", description="Free‑form description")


class CategoryRead(CategoryCreate):
    """Schema for reading a category."""

    id: int

    model_config = {
        "from_attributes": True,
    }
