"""
Top‑level package for the Finance API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``finance_api.app.main:app``.
"""

__all__ = []
