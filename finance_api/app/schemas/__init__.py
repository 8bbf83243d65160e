"""
Pydantic schema definitions for API payloads.

Accounts and categories each define their own request and response
models.  Schemas are separated from the database layer so the API
representation stays independent from the table layout.
"""
