from datetime import timedelta

from growth_diary.activity.models import ActivityLog
from growth_diary.core.clock import today


def _create_todo(c, title="Task", **fields):
    payload = {"title": title, "scheduled_date": today().isoformat(), **fields}
    resp = c.post("/api/todos", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_create_defaults_to_medium_priority(auth_client):
    alice = auth_client()
    _create_todo(alice, priority="")
    todo = alice.get("/api/todos").json()[0]
    assert todo["priority"] == "medium"
    assert todo["is_completed"] is False
    assert todo["completed_at"] is None


def test_create_validation(auth_client):
    alice = auth_client()
    resp = alice.post("/api/todos", json={"title": "  ", "scheduled_date": today().isoformat()})
    assert resp.status_code == 400
    assert resp.json()["detail"] == [{"field": "title", "message": "Title is required"}]

    resp = alice.post("/api/todos", json={"title": "x"})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["field"] == "scheduled_date"


def test_ordering_by_date_then_priority(auth_client):
    alice = auth_client()
    day = today()
    low = _create_todo(alice, "low", priority="low")
    urgent = _create_todo(alice, "urgent", priority="urgent")
    medium = _create_todo(alice, "medium", priority="medium")
    high = _create_todo(alice, "high", priority="high")
    tomorrow_urgent = _create_todo(alice, "later", priority="urgent", scheduled_date=(day + timedelta(days=1)).isoformat())

    ids = [t["id"] for t in alice.get("/api/todos").json()]
    assert ids == [urgent, high, medium, low, tomorrow_urgent]

    ids = [t["id"] for t in alice.get("/api/todos/today").json()]
    assert ids == [urgent, high, medium, low]


def test_toggle_twice_restores_state(auth_client, db_session):
    alice = auth_client()
    todo_id = _create_todo(alice, "Write tests")

    resp = alice.patch(f"/api/todos/{todo_id}/toggle")
    assert resp.json() == {"message": "Todo updated", "is_completed": True}
    todo = alice.get("/api/todos").json()[0]
    assert todo["completed_at"] is not None

    resp = alice.patch(f"/api/todos/{todo_id}/toggle")
    assert resp.json()["is_completed"] is False
    todo = alice.get("/api/todos").json()[0]
    assert todo["is_completed"] is False
    assert todo["completed_at"] is None

    activities = db_session.query(ActivityLog).filter_by(activity_type="todo_completed").all()
    assert [a.details for a in activities] == ["Completed: Write tests"]


def test_filters(auth_client):
    alice = auth_client()
    day = today()
    done = _create_todo(alice, "done", priority="high")
    open_id = _create_todo(alice, "open", scheduled_date=(day + timedelta(days=2)).isoformat())
    alice.patch(f"/api/todos/{done}/toggle")

    assert [t["id"] for t in alice.get("/api/todos", params={"completed": "true"}).json()] == [done]
    assert [t["id"] for t in alice.get("/api/todos", params={"completed": "false"}).json()] == [open_id]
    assert [t["id"] for t in alice.get("/api/todos", params={"date": day.isoformat()}).json()] == [done]
    assert [t["id"] for t in alice.get("/api/todos", params={"priority": "high"}).json()] == [done]
    ranged = alice.get(
        "/api/todos",
        params={"startDate": (day + timedelta(days=1)).isoformat(), "endDate": (day + timedelta(days=3)).isoformat()},
    ).json()
    assert [t["id"] for t in ranged] == [open_id]


def test_overdue_upcoming_and_reschedule(auth_client):
    alice = auth_client()
    day = today()
    overdue = _create_todo(alice, "late", scheduled_date=(day - timedelta(days=2)).isoformat())
    upcoming = _create_todo(alice, "soon", scheduled_date=(day + timedelta(days=3)).isoformat())
    _create_todo(alice, "far", scheduled_date=(day + timedelta(days=30)).isoformat())

    assert [t["id"] for t in alice.get("/api/todos/overdue").json()] == [overdue]
    assert [t["id"] for t in alice.get("/api/todos/upcoming").json()] == [upcoming]

    resp = alice.post("/api/todos/reschedule-overdue", json={"newDate": day.isoformat()})
    assert resp.json() == {"message": "Overdue todos rescheduled", "count": 1}
    assert alice.get("/api/todos/overdue").json() == []
    assert overdue in [t["id"] for t in alice.get("/api/todos/today").json()]


def test_reschedule_requires_date(auth_client):
    alice = auth_client()
    assert alice.post("/api/todos/reschedule-overdue", json={}).status_code == 400


def test_bulk_complete(auth_client):
    alice = auth_client()
    bob = auth_client("bob")
    ids = [_create_todo(alice, f"t{i}") for i in range(3)]
    bobs = _create_todo(bob, "bob's")

    resp = alice.post("/api/todos/bulk-complete", json={"ids": ids[:2] + [bobs]})
    assert resp.json() == {"message": "Todos completed", "count": 2}
    assert [t["is_completed"] for t in alice.get("/api/todos").json()] == [True, True, False]
    assert bob.get("/api/todos").json()[0]["is_completed"] is False


def test_bulk_complete_rejects_empty_list(auth_client):
    alice = auth_client()
    resp = alice.post("/api/todos/bulk-complete", json={"ids": []})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["message"] == "Invalid todo IDs"


def test_update_and_delete(auth_client):
    alice = auth_client()
    todo_id = _create_todo(alice, "old")

    assert alice.put(f"/api/todos/{todo_id}", json={"title": "  "}).status_code == 400
    assert alice.put(f"/api/todos/{todo_id}", json={"title": "new", "priority": "urgent"}).json() == {"message": "Todo updated"}
    todo = alice.get("/api/todos").json()[0]
    assert (todo["title"], todo["priority"]) == ("new", "urgent")

    assert alice.delete(f"/api/todos/{todo_id}").json() == {"message": "Todo deleted"}
    resp = alice.delete(f"/api/todos/{todo_id}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Todo not found"
