"""
Test admin session tokens and password checks.
"""
import pytest

from event_registration_api.app.core.config import settings
from event_registration_api.app.core.exceptions import AuthenticationFailed, NotConfigured
from event_registration_api.app.core.security import (
    ADMIN_SUBJECT,
    create_session_token,
    decode_session_token,
    verify_admin_password,
)


class TestSessionToken:
    def test_round_trip_claims(self):
        claims = decode_session_token(create_session_token())
        assert claims["sub"] == ADMIN_SUBJECT
        assert claims["exp"] - claims["iat"] == 24 * 60 * 60

    def test_expired(self):
        assert decode_session_token(create_session_token(expires_delta=-1)) is None

    def test_tampered_payload(self):
        header, _, signature = create_session_token().split(".")
        forged = create_session_token(subject="someone-else").split(".")[1]
        assert decode_session_token(f"{header}.{forged}.{signature}") is None

    def test_signed_with_other_secret(self, monkeypatch):
        token = create_session_token()
        monkeypatch.setattr(settings, "secret_key", "rotated")
        assert decode_session_token(token) is None

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "!!.??.**"])
    def test_malformed(self, token):
        assert decode_session_token(token) is None


class TestAdminPassword:
    def test_accepts_configured_password(self):
        verify_admin_password("let-me-in")

    @pytest.mark.parametrize("password", ["", None, "let-me-in ", "LET-ME-IN"])
    def test_rejects_other_passwords(self, password):
        with pytest.raises(AuthenticationFailed):
            verify_admin_password(password)

    def test_not_configured(self, monkeypatch):
        monkeypatch.setattr(settings, "admin_password", "")
        with pytest.raises(NotConfigured) as exc_info:
            verify_admin_password("anything")
        assert exc_info.value.status_code == 500
