import pytest
from fastapi.testclient import TestClient

from event_registration_api.app.core import db
from event_registration_api.app.core.config import settings
from event_registration_api.app.main import app

ADMIN_PASSWORD = "let-me-in"


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point every test at its own migrated SQLite file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "registrations.db"))
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "secret_key", "test-secret")
    db.init_db()
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    """A client holding a valid admin session cookie."""
    response = client.post("/api/v1/admin/session", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return client


def count_rows(table: str) -> int:
    conn = db.get_connection()
    try:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    finally:
        conn.close()


@pytest.fixture
def rows():
    """Row counter for a table, e.g. ``rows("participants")``."""
    return count_rows


def person(name: str, email: str, roll: str, contact: str = "9876543210", gender: str = "Female") -> dict:
    return {
        "name": name,
        "gender": gender,
        "rollNumber": roll,
        "contactNumber": contact,
        "email": email,
    }


@pytest.fixture
def member():
    return person


@pytest.fixture
def solo_form():
    def build(email: str = "alice@x.com", **overrides) -> dict:
        form = {
            "participationType": "solo",
            "leaderName": "Alice",
            "leaderGender": "Female",
            "leaderRollNumber": "cs21b001",
            "leaderContactNumber": "9876543210",
            "leaderEmail": email,
            "teamMembers": [],
        }
        form.update(overrides)
        return form

    return build


@pytest.fixture
def team_form(solo_form):
    def build(members=None, team_name: str = "Alpha", email: str = "alice@x.com", **overrides) -> dict:
        if members is None:
            members = [
                person("Bob", "bob@x.com", "cs21b002", "9123456780", "Male"),
                person("Carol", "carol@x.com", "cs21b003", "9012345678"),
            ]
        form = solo_form(email=email, participationType="team", teamName=team_name, teamMembers=members)
        form.update(overrides)
        return form

    return build
