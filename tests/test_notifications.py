from datetime import timedelta

from growth_diary.core.clock import today
from growth_diary.notifications import scheduler as notification_scheduler
from growth_diary.notifications.db import get_settings
from growth_diary.notifications.scheduler import (
    check_and_notify,
    send_motivational_notification,
    start_notification_scheduler,
    stop_notification_scheduler,
)


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send(self, title, message, kind="general"):
        self.sent.append((title, message, kind))
        return True


def _todo(c, title, offset=0):
    day = today() + timedelta(days=offset)
    return c.post("/api/todos", json={"title": title, "scheduled_date": day.isoformat()}).json()["id"]


def test_default_settings(auth_client):
    alice = auth_client()
    settings = alice.get("/api/notifications/settings").json()
    assert settings["reminder_enabled"] is True
    assert settings["motivation_enabled"] is True
    assert settings["reminder_times"] == ["09:00", "14:00", "20:00"]
    assert settings["pending_threshold"] == 3


def test_update_settings(auth_client):
    alice = auth_client()
    resp = alice.put(
        "/api/notifications/settings",
        json={"reminder_enabled": False, "reminder_times": ["07:30"], "pending_threshold": 5},
    )
    assert resp.json() == {"message": "Settings updated"}

    settings = alice.get("/api/notifications/settings").json()
    assert settings["reminder_enabled"] is False
    assert settings["reminder_times"] == ["07:30"]
    assert settings["pending_threshold"] == 5
    assert settings["motivation_enabled"] is True


def test_update_settings_validation(auth_client):
    alice = auth_client()
    resp = alice.put("/api/notifications/settings", json={"pending_threshold": 0})
    assert resp.status_code == 400
    resp = alice.put("/api/notifications/settings", json={"reminder_times": ["25:00"]})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["message"] == "Invalid reminder time: 25:00"


def test_settings_created_on_first_access(auth_client, db_session):
    alice = auth_client()
    db_session.delete(get_settings(db_session, alice.user["id"]))
    db_session.commit()

    assert alice.get("/api/notifications/settings").json()["pending_threshold"] == 3


def test_pending_items(auth_client):
    alice = auth_client()
    pending = _todo(alice, "today")
    done = _todo(alice, "done today")
    overdue = _todo(alice, "late", offset=-1)
    alice.patch(f"/api/todos/{done}/toggle")
    target = (today() + timedelta(days=3)).isoformat()
    goal_id = alice.post("/api/goals", json={"title": "soon", "goal_type": "short-term", "target_date": target}).json()["id"]
    alice.post(
        "/api/goals",
        json={"title": "far", "goal_type": "long-term", "target_date": (today() + timedelta(days=90)).isoformat()},
    )

    items = alice.get("/api/notifications/pending").json()
    assert [t["id"] for t in items["pendingTodos"]] == [pending]
    assert [t["id"] for t in items["overdueTodos"]] == [overdue]
    assert [g["id"] for g in items["upcomingGoals"]] == [goal_id]


def test_check_and_notify_threshold_and_overdue(auth_client, session_factory):
    alice = auth_client()
    for i in range(3):
        _todo(alice, f"t{i}")
    _todo(alice, "late", offset=-2)

    notifier = FakeNotifier()
    assert check_and_notify(session_factory, notifier) == 2
    titles = [title for title, _, _ in notifier.sent]
    assert titles == ["📋 Tasks Reminder", "⚠️ Overdue Tasks"]
    assert "3 tasks left" in notifier.sent[0][1]
    assert "1 overdue" in notifier.sent[1][1]


def test_check_and_notify_below_threshold(auth_client, session_factory):
    alice = auth_client()
    _todo(alice, "only one")
    notifier = FakeNotifier()
    assert check_and_notify(session_factory, notifier) == 0
    assert notifier.sent == []


def test_check_and_notify_skips_disabled_users(auth_client, session_factory):
    alice = auth_client()
    alice.put("/api/notifications/settings", json={"reminder_enabled": False})
    _todo(alice, "late", offset=-1)
    notifier = FakeNotifier()
    assert check_and_notify(session_factory, notifier) == 0


def test_motivational_notification(auth_client, session_factory):
    alice = auth_client()
    notifier = FakeNotifier()
    assert send_motivational_notification(session_factory, notifier) is True
    assert notifier.sent[0][0] == "✨ Daily Inspiration"
    assert notifier.sent[0][2] == "motivation"

    alice.put("/api/notifications/settings", json={"motivation_enabled": False})
    notifier = FakeNotifier()
    assert send_motivational_notification(session_factory, notifier) is False
    assert notifier.sent == []


def test_scheduler_registers_jobs(session_factory):
    sched = start_notification_scheduler(session_factory, FakeNotifier())
    try:
        assert sched.running
        assert {job.id for job in sched.get_jobs()} == {"pending-check", "motivation"}
    finally:
        stop_notification_scheduler()
    assert notification_scheduler.scheduler is None
