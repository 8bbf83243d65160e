"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers (accounts, categories) under
a unified prefix.  When a new domain is introduced, include its router
here.
"""

from fastapi import APIRouter

from .endpoints import accounts, categories

router = APIRouter()

router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
