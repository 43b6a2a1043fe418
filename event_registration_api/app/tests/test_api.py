"""
Test API endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from event_registration_api.app.core.config import settings
from event_registration_api.app.core.security import create_session_token


TUSSLE = "/api/v1/registrations/Tussle%203.0"


class TestRegistrationEndpoints:
    """Public registration form endpoints."""

    def test_team_registration_end_to_end(self, admin_client: TestClient, team_form):
        response = admin_client.post(TUSSLE, json=team_form())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["eventName"] == "Tussle 3.0"
        assert data["isTeam"] is True
        assert data["teamName"] == "Alpha"
        assert data["leaderName"] == "Alice"
        assert data["totalParticipants"] == 3
        assert data["participantsCreated"] == 3
        assert isinstance(data["registrationId"], int)

        detail = admin_client.get("/api/v1/admin/events/Tussle%203.0").json()["data"]
        assert detail["stats"]["totalRegistrations"] == 1
        assert detail["stats"]["teamCount"] == 1
        assert detail["stats"]["totalParticipants"] == 3
        [registration] = detail["registrations"]
        assert registration["id"] == data["registrationId"]
        assert len(registration["participants"]) == 3
        leaders = [p for p in registration["participants"] if p["isLeader"]]
        assert [p["email"] for p in leaders] == ["alice@x.com"]

    def test_solo_registration_omits_team_name(self, client: TestClient, solo_form):
        response = client.post(TUSSLE, json=solo_form())
        assert response.status_code == 201
        data = response.json()["data"]
        assert "teamName" not in data
        assert data["totalParticipants"] == 1

    def test_validation_failure_is_400(self, client: TestClient, solo_form, member, rows):
        form = solo_form(teamMembers=[member("Bob", "bob@x.com", "R2")])
        response = client.post(TUSSLE, json=form)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Solo participation cannot have team members.",
        }
        assert rows("registrations") == 0

    def test_format_failure_lists_details(self, client: TestClient, solo_form):
        response = client.post(TUSSLE, json=solo_form(leaderContactNumber="12345"))
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert body["details"] == ["Leader: Contact number must be exactly 10 digits"]

    def test_malformed_body_is_400(self, client: TestClient, solo_form):
        response = client.post(TUSSLE, json=solo_form(teamMembers="everyone"))
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert body["details"]

    def test_duplicate_registration_is_409(self, client: TestClient, solo_form, rows):
        assert client.post(TUSSLE, json=solo_form()).status_code == 201
        response = client.post(TUSSLE, json=solo_form(email="Alice@X.com"))
        assert response.status_code == 409
        assert response.json()["error"] == "You have already registered for this event."
        assert rows("registrations") == 1

    def test_duplicate_member_email_is_409(self, client: TestClient, team_form, member):
        members = [member("Bob", "bob@x.com", "R2"), member("Bobby", "BOB@x.com", "R3")]
        response = client.post(TUSSLE, json=team_form(members=members))
        assert response.status_code == 409

    def test_store_failure_is_500(self, client: TestClient, solo_form, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "database_url", str(tmp_path / "gone" / "db.sqlite"))
        response = client.post(TUSSLE, json=solo_form())
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Database is unavailable"

    def test_list_registrations(self, client: TestClient, solo_form, team_form):
        client.post(TUSSLE, json=solo_form(email="solo@x.com"))
        client.post(TUSSLE, json=team_form())
        response = client.get(TUSSLE)
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [r["leaderEmail"] for r in body["data"]] == ["alice@x.com", "solo@x.com"]


class TestEventEndpoints:
    """Public and admin event endpoints."""

    def create(self, client: TestClient, **overrides):
        event = {"name": "Hackathon 2025", "slug": "hackathon-2025", "description": "Code", "date": "Jan 15"}
        event.update(overrides)
        return client.post("/api/v1/admin/events", json=event)

    def test_create_event(self, admin_client: TestClient):
        response = self.create(admin_client)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "hackathon-2025"
        assert data["maxTeamSize"] == 4
        assert data["minTeamSize"] == 1
        assert data["isActive"] is True

    def test_create_event_missing_fields(self, admin_client: TestClient):
        response = admin_client.post("/api/v1/admin/events", json={"name": "Hackathon 2025"})
        assert response.status_code == 400
        assert response.json()["error"] == "All required fields must be provided"

    def test_duplicate_slug_is_409(self, admin_client: TestClient, rows):
        self.create(admin_client)
        response = self.create(admin_client, name="Hackathon Again")
        assert response.status_code == 409
        assert response.json()["error"] == "Event with this name or slug already exists"
        assert rows("events") == 1

    def test_admin_list_is_newest_first(self, admin_client: TestClient):
        self.create(admin_client)
        self.create(admin_client, name="Startup Pitch", slug="startup-pitch", maxTeamSize=5)
        body = admin_client.get("/api/v1/admin/events").json()
        assert [e["name"] for e in body["data"]] == ["Startup Pitch", "Hackathon 2025"]
        assert body["data"][0]["maxTeamSize"] == 5

    def test_public_listing_and_lookup(self, admin_client: TestClient):
        self.create(admin_client)
        listed = admin_client.get("/api/v1/events/").json()
        assert [e["slug"] for e in listed["data"]] == ["hackathon-2025"]
        assert admin_client.get("/api/v1/events/hackathon-2025").json()["data"]["name"] == "Hackathon 2025"

        missing = admin_client.get("/api/v1/events/unknown")
        assert missing.status_code == 404
        assert missing.json()["success"] is False

    def test_stats(self, admin_client: TestClient, solo_form, team_form):
        self.create(admin_client, name="Tussle 3.0", slug="tussle-3")
        admin_client.post(TUSSLE, json=solo_form(email="solo@x.com"))
        admin_client.post(TUSSLE, json=team_form())
        body = admin_client.get("/api/v1/admin/stats").json()
        assert body["data"] == [
            {
                "eventName": "Tussle 3.0",
                "totalRegistrations": 2,
                "individualCount": 1,
                "teamCount": 1,
                "totalParticipants": 4,
            }
        ]


class TestAdminSession:
    """Admin login and route protection."""

    @pytest.mark.parametrize(
        "path", ["/api/v1/admin/events", "/api/v1/admin/stats", "/api/v1/admin/events/Tussle%203.0"]
    )
    def test_admin_routes_require_session(self, client: TestClient, path):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Not authenticated"}

    def test_create_event_requires_session(self, client: TestClient, rows):
        response = client.post(
            "/api/v1/admin/events",
            json={"name": "Hack", "slug": "hack", "description": "d", "date": "x"},
        )
        assert response.status_code == 401
        assert rows("events") == 0

    def test_login_sets_http_only_cookie(self, client: TestClient):
        response = client.post("/api/v1/admin/session", json={"password": "let-me-in"})
        assert response.status_code == 200
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{settings.session_cookie_name}=")
        assert "HttpOnly" in cookie
        assert "Max-Age=86400" in cookie
        assert "samesite=strict" in cookie.lower()
        assert client.get("/api/v1/admin/stats").status_code == 200

    def test_wrong_password(self, client: TestClient):
        response = client.post("/api/v1/admin/session", json={"password": "guess"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid password"
        assert "set-cookie" not in response.headers

    def test_password_not_configured(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "admin_password", "")
        response = client.post("/api/v1/admin/session", json={"password": ""})
        assert response.status_code == 500
        assert response.json()["error"] == "Admin password not configured"

    def test_bearer_token(self, client: TestClient):
        token = create_session_token()
        response = client.get("/api/v1/admin/events", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200

    def test_expired_token(self, client: TestClient):
        token = create_session_token(expires_delta=-60)
        response = client.get("/api/v1/admin/events", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_logout_expires_cookie(self, admin_client: TestClient):
        response = admin_client.delete("/api/v1/admin/session")
        assert response.status_code == 200
        assert response.headers["set-cookie"].startswith(f"{settings.session_cookie_name}=")

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"success": True, "status": "ok"}

    def test_stale_cookie_falls_back_to_bearer(self, client: TestClient):
        stale = create_session_token(expires_delta=-60)
        headers = {
            "Cookie": f"{settings.session_cookie_name}={stale}",
            "Authorization": f"Bearer {create_session_token()}",
        }
        response = client.get("/api/v1/admin/events", headers=headers)
        assert response.status_code == 200

    def test_stale_cookie_alone_is_rejected(self, client: TestClient):
        cookie = {"Cookie": f"{settings.session_cookie_name}=not.a.token"}
        response = client.get("/api/v1/admin/events", headers=cookie)
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired session"


class TestEventNamesWithSlashes:
    """Event names are free text and travel percent-encoded in the path."""

    def test_register_and_view_event_with_slash(self, admin_client: TestClient, solo_form):
        response = admin_client.post("/api/v1/registrations/AI%2FML%20Bootcamp", json=solo_form())
        assert response.status_code == 201
        assert response.json()["data"]["eventName"] == "AI/ML Bootcamp"

        listed = admin_client.get("/api/v1/registrations/AI%2FML%20Bootcamp").json()
        assert listed["count"] == 1

        detail = admin_client.get("/api/v1/admin/events/AI%2FML%20Bootcamp").json()["data"]
        assert detail["stats"]["totalRegistrations"] == 1
        assert detail["registrations"][0]["eventName"] == "AI/ML Bootcamp"


class TestFrameworkErrors:
    """Routing errors use the same envelope as everything else."""

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/v1/nowhere")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    def test_wrong_method(self, client: TestClient):
        response = client.put("/api/v1/admin/session", json={})
        assert response.status_code == 405
        assert response.json() == {"success": False, "error": "Method Not Allowed"}
        assert "allow" in response.headers
