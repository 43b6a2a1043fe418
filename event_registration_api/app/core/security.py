"""
Admin authentication helpers.

The administrator logs in with a shared password held in the server
settings.  A successful login yields a signed session token: a
compact JWT (``header.payload.signature``, base64url encoded, HMAC
SHA‑256) embedding the subject and an ``exp`` timestamp.  The token is
delivered as an HTTP‑only cookie and is also accepted as a ``Bearer``
credential so scripts can call the admin endpoints.

Routes depend on ``require_admin`` only; how the token is produced or
carried can change without touching the registration or aggregation
services.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import AuthenticationFailed, NotConfigured


ADMIN_SUBJECT = "admin"


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def session_lifetime_seconds() -> int:
    return settings.session_expire_hours * 60 * 60


def create_session_token(subject: str = ADMIN_SUBJECT, expires_delta: Optional[int] = None) -> str:
    """Create a signed session token.

    Parameters
    ----------
    subject : str
        Value of the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime in seconds.  Defaults to ``SESSION_EXPIRE_HOURS``.

    Returns
    -------
    str
        The token string.
    """
    now = int(time.time())
    lifetime = expires_delta if expires_delta is not None else session_lifetime_seconds()
    claims = {"sub": subject, "iat": now, "exp": now + lifetime}
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_session_token(token: str) -> Optional[Dict[str, object]]:
    """Verify a session token and return its claims.

    Returns ``None`` when the token is malformed, carries a bad
    signature or has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        expected_sig = _sign(signing_input, settings.secret_key)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        claims = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(claims, dict):
        return None
    exp = claims.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        return None
    return claims


def verify_admin_password(password: Optional[str]) -> None:
    """Check ``password`` against the configured admin password.

    Raises ``NotConfigured`` when no password is configured and
    ``AuthenticationFailed`` on mismatch.
    """
    if not settings.admin_password:
        raise NotConfigured("Admin password not configured")
    supplied = (password or "").encode("utf-8")
    if not hmac.compare_digest(supplied, settings.admin_password.encode("utf-8")):
        logging.getLogger(__name__).warning("Rejected admin login attempt")
        raise AuthenticationFailed("Invalid password")


bearer = HTTPBearer(auto_error=False)


def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Dict[str, object]:
    """Dependency guarding admin routes.

    The session cookie is tried first, then the ``Authorization``
    header, so a stale cookie does not shadow a valid bearer token.
    Raises ``AuthenticationFailed`` when neither carries a valid token
    for the admin subject.
    """
    tokens = [request.cookies.get(settings.session_cookie_name)]
    if credentials is not None:
        tokens.append(credentials.credentials)
    tokens = [token for token in tokens if token]
    if not tokens:
        raise AuthenticationFailed("Not authenticated")
    for token in tokens:
        claims = decode_session_token(token)
        if claims and claims.get("sub") == ADMIN_SUBJECT:
            return claims
    raise AuthenticationFailed("Invalid or expired session")
