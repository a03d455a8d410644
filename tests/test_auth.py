from growth_diary.activity.models import ActivityLog
from growth_diary.notifications.models import NotificationSettings

from conftest import PASSWORD


def test_register_starts_session(client):
    resp = client.post("/api/auth/register", json={"username": "  alice ", "password": PASSWORD})
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Registration successful"
    assert body["user"]["username"] == "alice"

    status = client.get("/api/auth/status").json()
    assert status == {"authenticated": True, "user": body["user"]}


def test_register_creates_default_notification_settings(client, db_session):
    user = client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD}).json()["user"]
    settings = db_session.query(NotificationSettings).filter_by(user_id=user["id"]).one()
    assert settings.reminder_times == ["09:00", "14:00", "20:00"]
    assert settings.pending_threshold == 3


def test_register_duplicate_username(client, auth_client):
    auth_client("alice")
    resp = client.post("/api/auth/register", json={"username": "alice", "password": PASSWORD})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already exists"


def test_register_validation_messages(client):
    resp = client.post("/api/auth/register", json={"username": "a!", "password": "123"})
    assert resp.status_code == 400
    fields = {err["field"] for err in resp.json()["detail"]}
    assert fields == {"username", "password"}


def test_login_and_logout(client, auth_client, db_session):
    auth_client("alice")

    resp = client.post("/api/auth/login", json={"username": "alice", "password": PASSWORD})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Login successful"
    assert client.get("/api/auth/status").json()["authenticated"] is True
    assert db_session.query(ActivityLog).filter_by(activity_type="login").count() == 1

    resp = client.post("/api/auth/logout")
    assert resp.json() == {"message": "Logged out successfully"}
    assert client.get("/api/auth/status").json() == {"authenticated": False}


def test_login_wrong_password(client, auth_client):
    auth_client("alice")
    resp = client.post("/api/auth/login", json={"username": "alice", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid username or password"


def test_login_unknown_user(client):
    resp = client.post("/api/auth/login", json={"username": "ghost", "password": PASSWORD})
    assert resp.status_code == 401


def test_api_requires_session(client):
    for path in ("/api/journal", "/api/goals", "/api/todos", "/api/stats/dashboard", "/api/notifications/settings"):
        resp = client.get(path)
        assert resp.status_code == 401, path
        assert resp.json()["detail"] == "Unauthorized"


def test_change_password(auth_client, client):
    alice = auth_client("alice")
    resp = alice.post(
        "/api/auth/change-password",
        json={"currentPassword": "wrong-one", "newPassword": "another1"},
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Current password is incorrect"

    resp = alice.post(
        "/api/auth/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "another1"},
    )
    assert resp.status_code == 200

    assert client.post("/api/auth/login", json={"username": "alice", "password": PASSWORD}).status_code == 401
    assert client.post("/api/auth/login", json={"username": "alice", "password": "another1"}).status_code == 200
