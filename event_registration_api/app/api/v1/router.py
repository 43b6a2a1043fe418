"""
Top‑level router for version 1 of the API.

Aggregates the per‑area routers under a unified prefix.  The session
router shares the ``/admin`` prefix with the admin router but is not
guarded, so the login endpoint stays reachable without a session.
"""

from fastapi import APIRouter

from .endpoints import admin, events, registrations, session

router = APIRouter()

router.include_router(registrations.router, prefix="/registrations", tags=["registrations"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(session.router, prefix="/admin", tags=["admin"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
