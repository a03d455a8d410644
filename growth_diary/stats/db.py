"""
Aggregate queries behind the dashboard, heatmap, charts, streaks and export.
"""
import calendar
from datetime import date, timedelta
from typing import Any, Dict, List, Set

from sqlalchemy import case, func, select, union
from sqlalchemy.orm import Session

from growth_diary.activity.models import ActivityLog
from growth_diary.core.clock import today
from growth_diary.goals.models import Goal, GoalMilestone
from growth_diary.goals.schemas import GoalBase, MilestoneBase
from growth_diary.journals.models import JournalEntry
from growth_diary.journals.schemas import JournalEntryBase
from growth_diary.stats.streaks import current_streak, longest_streak
from growth_diary.todos.models import Todo
from growth_diary.todos.schemas import TodoBase

RECENT_JOURNAL_DAYS = 7
GOALS_PER_TYPE = 10

_completed_count = func.coalesce(func.sum(case((Todo.is_completed.is_(True), 1), else_=0)), 0)


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _months_ago(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last_day))


# Streaks
def get_active_dates(db: Session, user_id: int) -> Set[date]:
    """
    Days with any recorded activity: the UNION of journal entry dates,
    completion dates of todos and activity log dates.
    """
    query = union(
        select(func.date(JournalEntry.entry_date).label("day")).where(JournalEntry.user_id == user_id),
        select(func.date(Todo.completed_at).label("day")).where(
            Todo.user_id == user_id,
            Todo.is_completed.is_(True),
            Todo.completed_at.is_not(None),
        ),
        select(func.date(ActivityLog.activity_date).label("day")).where(ActivityLog.user_id == user_id),
    )
    return {_as_date(day) for day in db.execute(query).scalars() if day}


def get_streaks(db: Session, user_id: int) -> Dict[str, int]:
    dates = get_active_dates(db, user_id)
    return {"current": current_streak(dates, today()), "longest": longest_streak(dates)}


# Dashboard
def get_dashboard_stats(db: Session, user_id: int) -> Dict[str, Any]:
    day = today()

    total, completed = (
        db.query(func.count(Todo.id), _completed_count)
        .filter(Todo.user_id == user_id, Todo.scheduled_date == day)
        .one()
    )

    overdue = (
        db.query(func.count(Todo.id))
        .filter(Todo.user_id == user_id, Todo.scheduled_date < day, Todo.is_completed.is_(False))
        .scalar()
    )

    active_goals = (
        db.query(Goal.goal_type, func.count(Goal.id), func.avg(Goal.progress))
        .filter(Goal.user_id == user_id, Goal.status == "active")
        .group_by(Goal.goal_type)
        .all()
    )

    recent_journals = (
        db.query(func.count(JournalEntry.id))
        .filter(
            JournalEntry.user_id == user_id,
            JournalEntry.entry_date >= day - timedelta(days=RECENT_JOURNAL_DAYS),
        )
        .scalar()
    )

    return {
        "todayTodos": {"total": total, "completed": int(completed)},
        "overdueTodos": overdue,
        "activeGoals": [
            {"goal_type": goal_type, "count": count, "avg_progress": float(avg or 0)}
            for goal_type, count, avg in active_goals
        ],
        "recentJournals": recent_journals,
        "streak": current_streak(get_active_dates(db, user_id), day),
    }


# Heatmap
def get_heatmap(db: Session, user_id: int, year: int) -> Dict[str, int]:
    """Per-day activity counts for one calendar year, summed over all sources."""
    year_str = str(year)
    sources = [
        db.query(func.date(ActivityLog.activity_date), func.count(ActivityLog.id))
        .filter(ActivityLog.user_id == user_id, func.strftime("%Y", ActivityLog.activity_date) == year_str)
        .group_by(func.date(ActivityLog.activity_date)),
        db.query(func.date(Todo.completed_at), func.count(Todo.id))
        .filter(
            Todo.user_id == user_id,
            Todo.is_completed.is_(True),
            func.strftime("%Y", Todo.completed_at) == year_str,
        )
        .group_by(func.date(Todo.completed_at)),
        db.query(func.date(JournalEntry.entry_date), func.count(JournalEntry.id))
        .filter(JournalEntry.user_id == user_id, func.strftime("%Y", JournalEntry.entry_date) == year_str)
        .group_by(func.date(JournalEntry.entry_date)),
    ]

    heatmap: Dict[str, int] = {}
    for query in sources:
        for day, count in query.all():
            if day:
                key = _as_date(day).isoformat()
                heatmap[key] = heatmap.get(key, 0) + count
    return heatmap


# Charts
def get_todo_stats(db: Session, user_id: int, period: str = "month") -> List[Dict[str, Any]]:
    day = today()
    if period == "day":
        since = day - timedelta(days=30)
        bucket = func.date(Todo.scheduled_date)
    elif period == "week":
        since = day - timedelta(weeks=12)
        bucket = func.strftime("%Y-%W", Todo.scheduled_date)
    else:
        since = _months_ago(day, 12)
        bucket = func.strftime("%Y-%m", Todo.scheduled_date)

    bucket = bucket.label("period")
    rows = (
        db.query(bucket, func.count(Todo.id), _completed_count)
        .filter(Todo.user_id == user_id, Todo.scheduled_date >= since)
        .group_by(bucket)
        .order_by(bucket.asc())
        .all()
    )
    return [{"period": p, "total": total, "completed": int(completed)} for p, total, completed in rows]


def _recent_goals(db: Session, user_id: int, goal_type: str) -> List[Dict[str, Any]]:
    goals = (
        db.query(Goal)
        .filter(Goal.user_id == user_id, Goal.goal_type == goal_type)
        .order_by(Goal.created_at.desc(), Goal.id.desc())
        .limit(GOALS_PER_TYPE)
        .all()
    )
    return [
        {
            "id": g.id,
            "title": g.title,
            "progress": g.progress,
            "target_date": g.target_date.isoformat() if g.target_date else None,
            "status": g.status,
            "created_at": g.created_at.isoformat(),
        }
        for g in goals
    ]


def get_goal_stats(db: Session, user_id: int) -> Dict[str, Any]:
    completion = (
        db.query(
            Goal.goal_type,
            func.count(Goal.id),
            func.coalesce(func.sum(case((Goal.status == "completed", 1), else_=0)), 0),
        )
        .filter(Goal.user_id == user_id)
        .group_by(Goal.goal_type)
        .all()
    )
    return {
        "shortTermGoals": _recent_goals(db, user_id, "short-term"),
        "longTermGoals": _recent_goals(db, user_id, "long-term"),
        "completionStats": [
            {"goal_type": goal_type, "total": total, "completed": int(completed)}
            for goal_type, total, completed in completion
        ],
    }


def get_mood_stats(db: Session, user_id: int, days: int = 30) -> Dict[str, Any]:
    since = today() - timedelta(days=days)
    trend = (
        db.query(JournalEntry.entry_date, JournalEntry.mood)
        .filter(
            JournalEntry.user_id == user_id,
            JournalEntry.mood.is_not(None),
            JournalEntry.entry_date >= since,
        )
        .order_by(JournalEntry.entry_date.asc(), JournalEntry.id.asc())
        .all()
    )
    distribution = (
        db.query(JournalEntry.mood, func.count(JournalEntry.id))
        .filter(JournalEntry.user_id == user_id, JournalEntry.mood.is_not(None))
        .group_by(JournalEntry.mood)
        .all()
    )
    return {
        "trend": [{"entry_date": d.isoformat(), "mood": mood} for d, mood in trend],
        "distribution": [{"mood": mood, "count": count} for mood, count in distribution],
    }


# Export
def export_user_data(db: Session, user_id: int) -> Dict[str, Any]:
    journals = db.query(JournalEntry).filter(JournalEntry.user_id == user_id).order_by(JournalEntry.id).all()
    goals = db.query(Goal).filter(Goal.user_id == user_id).order_by(Goal.id).all()
    milestones = (
        db.query(GoalMilestone)
        .join(Goal, GoalMilestone.goal_id == Goal.id)
        .filter(Goal.user_id == user_id)
        .order_by(GoalMilestone.id)
        .all()
    )
    todos = db.query(Todo).filter(Todo.user_id == user_id).order_by(Todo.id).all()

    return {
        "journals": [JournalEntryBase.model_validate(j).model_dump(mode="json") for j in journals],
        "goals": [GoalBase.model_validate(g).model_dump(mode="json") for g in goals],
        "milestones": [MilestoneBase.model_validate(m).model_dump(mode="json") for m in milestones],
        "todos": [TodoBase.model_validate(t).model_dump(mode="json") for t in todos],
    }
