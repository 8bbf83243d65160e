"""
Account type validation.

A new account must carry exactly the type of the category it is filed
under.  The comparison is a plain, case‑sensitive string equality: no
trimming, no case folding.
"""

from finance_api.app.core.errors import TypeMismatchError
from finance_api.app.schemas.category import CategoryRead


def validate_account_type(category: CategoryRead, requested_type: str) -> None:
    """Raise ``TypeMismatchError`` unless ``requested_type`` equals ``category.type``."""
    if category.type != requested_type:
        raise TypeMismatchError(category.type, requested_type)
