"""
Application package initializer.

The API is split into ``core`` (settings, logging, database, security
and domain exceptions), ``schemas`` (pydantic payloads), ``services``
(business rules and queries) and ``api`` (versioned FastAPI routers).
"""

from .main import app  # noqa: F401
