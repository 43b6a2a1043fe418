"""
Admin session endpoints for API v1.

``POST /admin/session`` exchanges the shared admin password for a
signed session token stored in an HTTP‑only cookie.  The token is also
returned in the body so non‑browser clients can send it as a
``Bearer`` credential.
"""

import logging

from fastapi import APIRouter, Response

from event_registration_api.app.core.config import settings
from event_registration_api.app.core.security import (
    create_session_token,
    session_lifetime_seconds,
    verify_admin_password,
)
from event_registration_api.app.schemas.auth import AdminLogin
from event_registration_api.app.schemas.common import APIResponse


router = APIRouter()


@router.post("/session", response_model=APIResponse, response_model_exclude_none=True)
async def login(credentials: AdminLogin, response: Response) -> APIResponse:
    """Log the administrator in.

    Answers 500 if no admin password is configured and 401 if the
    password does not match.
    """
    verify_admin_password(credentials.password)
    token = create_session_token()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=session_lifetime_seconds(),
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        path="/",
    )
    logging.getLogger(__name__).info("Admin session opened")
    return APIResponse(success=True, message="Login successful", data={"token": token})


@router.delete("/session", response_model=APIResponse, response_model_exclude_none=True)
async def logout(response: Response) -> APIResponse:
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return APIResponse(success=True, message="Logged out")
