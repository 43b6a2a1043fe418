"""Event Registration API client.

A thin wrapper around the ``/api/v1`` endpoints using ``requests``.
Every method returns a tuple ``(data, error)``: ``data`` is the
``data`` member of the response envelope on success and ``error`` is
``None``; on failure ``data`` is ``None`` and ``error`` is a dictionary
with ``status_code``, ``message`` and, when the server sent them,
``details``.

Admin methods need a session: call :meth:`RegistrationAPI.login` (the
returned token is remembered and sent as a ``Bearer`` credential) or
pass ``api_key`` at construction, e.g. a token printed by
``create_token.py``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class RegistrationAPI:
    """Client for the event registration service."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Server root, e.g. ``https://example.com``.  The
                ``/api/v1`` prefix is added by the client.
            api_key: Optional admin session token.
            session: Optional requests session; one is created if omitted.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + "/api/v1"
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Result:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {"error": response.text}

        if response.status_code >= 400 or not body.get("success", True):
            error = {
                "status_code": response.status_code,
                "message": body.get("error") or body.get("message") or response.reason,
            }
            if body.get("details"):
                error["details"] = body["details"]
            logger.error("API request failed (%s): %s", error["status_code"], error["message"])
            return None, error
        return body.get("data"), None

    @staticmethod
    def _segment(value: str) -> str:
        """Percent‑encode a path segment such as an event name."""
        return quote(value, safe="")

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def list_events(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Return the active events."""
        data, error = self._request("GET", "/events/")
        return (data or []), error

    def get_event(self, slug: str) -> Result:
        return self._request("GET", f"/events/{self._segment(slug)}")

    def register(self, event_name: str, form: Dict[str, Any]) -> Result:
        """Submit a registration form for ``event_name``.

        ``form`` uses the wire field names (``participationType``,
        ``leaderName``, ``teamMembers``...).
        """
        return self._request("POST", f"/registrations/{self._segment(event_name)}", json_body=form)

    def list_registrations(self, event_name: str) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/registrations/{self._segment(event_name)}")
        return (data or []), error

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def login(self, password: str) -> Result:
        """Open an admin session and remember its token."""
        data, error = self._request("POST", "/admin/session", json_body={"password": password})
        if data and data.get("token"):
            self.api_key = data["token"]
        return data, error

    def logout(self) -> Result:
        data, error = self._request("DELETE", "/admin/session")
        if not error:
            self.api_key = None
        return data, error

    def admin_events(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/events")
        return (data or []), error

    def create_event(self, event: Dict[str, Any]) -> Result:
        return self._request("POST", "/admin/events", json_body=event)

    def stats(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/admin/stats")
        return (data or []), error

    def event_detail(self, event_name: str) -> Result:
        return self._request("GET", f"/admin/events/{self._segment(event_name)}")
