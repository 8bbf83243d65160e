"""
Application package initializer.

The API is organised into ``core`` (configuration, logging, database,
errors), ``schemas`` (request and response models), ``services``
(validation, orchestration and the storage boundary) and ``api``
(versioned routers).
"""

from .main import app  # noqa: F401
