import pytest

from growth_diary.activity.models import ActivityLog
from growth_diary.goals.db import progress_from_milestones


def _create_goal(c, **fields):
    payload = {"title": "Run a marathon", "goal_type": "long-term", **fields}
    resp = c.post("/api/goals", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


@pytest.mark.parametrize(
    "completed,total,expected",
    [(0, 3, 0), (1, 3, 33), (2, 3, 67), (3, 3, 100), (1, 2, 50), (1, 8, 13), (5, 8, 63)],
)
def test_progress_from_milestones(completed, total, expected):
    assert progress_from_milestones(completed, total) == expected


def test_create_goal_with_inline_milestones(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice, milestones=[{"title": "5k"}, {"title": "  "}, {"title": "10k"}])

    goal = alice.get(f"/api/goals/{goal_id}").json()
    assert goal["status"] == "active"
    assert goal["progress"] == 0
    assert goal["total_milestones"] == 2
    assert [m["title"] for m in goal["milestones"]] == ["5k", "10k"]


def test_create_goal_requires_title(auth_client):
    alice = auth_client()
    resp = alice.post("/api/goals", json={"title": " ", "goal_type": "short-term"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == [{"field": "title", "message": "Title is required"}]


def test_create_goal_rejects_unknown_type(auth_client):
    alice = auth_client()
    resp = alice.post("/api/goals", json={"title": "x", "goal_type": "someday"})
    assert resp.status_code == 400


def test_milestone_toggle_recomputes_progress(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice)
    ids = [
        alice.post(f"/api/goals/{goal_id}/milestones", json={"title": t}).json()["id"]
        for t in ("a", "b", "c")
    ]

    resp = alice.patch(f"/api/goals/{goal_id}/milestones/{ids[0]}/toggle")
    assert resp.json() == {"message": "Milestone updated", "is_completed": True}
    assert alice.get(f"/api/goals/{goal_id}").json()["progress"] == 33

    alice.patch(f"/api/goals/{goal_id}/milestones/{ids[1]}/toggle")
    goal = alice.get(f"/api/goals/{goal_id}").json()
    assert goal["progress"] == 67
    assert goal["completed_milestones"] == 2

    resp = alice.patch(f"/api/goals/{goal_id}/milestones/{ids[0]}/toggle")
    assert resp.json()["is_completed"] is False
    assert alice.get(f"/api/goals/{goal_id}").json()["progress"] == 33


def test_milestone_must_belong_to_goal(auth_client):
    alice = auth_client()
    first = _create_goal(alice)
    second = _create_goal(alice, title="Read more")
    milestone_id = alice.post(f"/api/goals/{first}/milestones", json={"title": "a"}).json()["id"]

    resp = alice.patch(f"/api/goals/{second}/milestones/{milestone_id}/toggle")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Milestone not found"


def test_blank_milestone_rejected(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice)
    resp = alice.post(f"/api/goals/{goal_id}/milestones", json={"title": ""})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["message"] == "Milestone title is required"


def test_delete_milestone(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice)
    milestone_id = alice.post(f"/api/goals/{goal_id}/milestones", json={"title": "a"}).json()["id"]

    assert alice.delete(f"/api/goals/{goal_id}/milestones/{milestone_id}").json() == {"message": "Milestone deleted"}
    assert alice.delete(f"/api/goals/{goal_id}/milestones/{milestone_id}").status_code == 404
    assert alice.get(f"/api/goals/{goal_id}").json()["milestones"] == []


def test_update_progress_logs_activity(auth_client, db_session):
    alice = auth_client()
    goal_id = _create_goal(alice)

    resp = alice.put(f"/api/goals/{goal_id}", json={"progress": 40})
    assert resp.json() == {"message": "Goal updated"}
    assert alice.get(f"/api/goals/{goal_id}").json()["progress"] == 40

    activity = db_session.query(ActivityLog).filter_by(activity_type="goal_progress").one()
    assert activity.details == 'Goal "Run a marathon" progress: 40%'


def test_update_progress_out_of_range(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice)
    resp = alice.put(f"/api/goals/{goal_id}", json={"progress": 120})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["field"] == "progress"


def test_complete_goal_sets_completed_at(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice)
    alice.put(f"/api/goals/{goal_id}", json={"status": "completed"})
    goal = alice.get(f"/api/goals/{goal_id}").json()
    assert goal["status"] == "completed"
    assert goal["completed_at"] is not None


def test_list_filters(auth_client):
    alice = auth_client()
    long_id = _create_goal(alice)
    short_id = _create_goal(alice, title="Clean desk", goal_type="short-term")
    alice.put(f"/api/goals/{short_id}", json={"status": "paused"})

    assert [g["id"] for g in alice.get("/api/goals", params={"type": "long-term"}).json()] == [long_id]
    assert [g["id"] for g in alice.get("/api/goals", params={"status": "paused"}).json()] == [short_id]
    assert len(alice.get("/api/goals").json()) == 2


def test_delete_goal(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice, milestones=[{"title": "a"}])
    assert alice.delete(f"/api/goals/{goal_id}").json() == {"message": "Goal deleted"}
    resp = alice.get(f"/api/goals/{goal_id}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Goal not found"


def test_delete_milestone_recomputes_progress(auth_client):
    alice = auth_client()
    goal_id = _create_goal(alice, milestones=[{"title": "done"}, {"title": "open"}])
    done_id, open_id = [m["id"] for m in alice.get(f"/api/goals/{goal_id}").json()["milestones"]]
    alice.patch(f"/api/goals/{goal_id}/milestones/{done_id}/toggle")
    assert alice.get(f"/api/goals/{goal_id}").json()["progress"] == 50

    alice.delete(f"/api/goals/{goal_id}/milestones/{open_id}")
    goal = alice.get(f"/api/goals/{goal_id}").json()
    assert goal["progress"] == 100
    assert goal["total_milestones"] == 1
