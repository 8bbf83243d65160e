"""
Error taxonomy for the finance API.

Every failure raised by the service layer or a store is a subclass of
``FinanceAPIError`` and carries the HTTP status code the transport
layer should answer with.  The exception handlers registered in
``main.create_app`` turn them into JSON responses; nothing inside the
services retries or swallows them.
"""

from typing import Optional


class FinanceAPIError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedInputError(FinanceAPIError):
    """The request shape or a parameter value is invalid."""

    status_code = 400


class NotFoundError(FinanceAPIError):
    """A referenced account or category does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[int] = None) -> None:
        if entity_id is None:
            message = f"{entity.capitalize()} not found"
        else:
            message = f"{entity.capitalize()} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class TypeMismatchError(FinanceAPIError):
    """The requested account type differs from the category type."""

    status_code = 400

    def __init__(self, category_type: str, requested_type: str) -> None:
        super().__init__(
            f"Account type '{requested_type}' is different of category type '{category_type}'"
        )
        self.category_type = category_type
        self.requested_type = requested_type


class PersistenceError(FinanceAPIError):
    """The storage engine failed to complete an operation."""

    status_code = 500
