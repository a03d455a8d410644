from datetime import timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from growth_diary.core.clock import today
from growth_diary.goals.models import Goal
from growth_diary.notifications.models import NotificationSettings
from growth_diary.notifications.schemas import NotificationSettingsUpdate
from growth_diary.todos.models import Todo


def create_default_settings(db: Session, user_id: int, commit: bool = True) -> NotificationSettings:
    settings = NotificationSettings(user_id=user_id)
    db.add(settings)
    if commit:
        db.commit()
        db.refresh(settings)
    return settings


def get_settings(db: Session, user_id: int) -> Optional[NotificationSettings]:
    return db.query(NotificationSettings).filter(NotificationSettings.user_id == user_id).first()


def get_or_create_settings(db: Session, user_id: int) -> NotificationSettings:
    settings = get_settings(db, user_id)
    if settings is None:
        settings = create_default_settings(db, user_id)
    return settings


def update_settings(db: Session, user_id: int, update: NotificationSettingsUpdate) -> NotificationSettings:
    settings = get_or_create_settings(db, user_id)
    for field, value in update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(settings, field, value)
    db.commit()
    db.refresh(settings)
    return settings


def get_upcoming_goals(db: Session, user_id: int, days: int = 7) -> List[Goal]:
    """Active goals whose target date falls within the next `days` days."""
    start = today()
    return (
        db.query(Goal)
        .filter(
            Goal.user_id == user_id,
            Goal.status == "active",
            Goal.target_date.between(start, start + timedelta(days=days)),
        )
        .order_by(Goal.target_date.asc())
        .all()
    )


# Poller queries
def users_with_reminders(db: Session) -> List[NotificationSettings]:
    return db.query(NotificationSettings).filter(NotificationSettings.reminder_enabled.is_(True)).all()


def any_user_wants_motivation(db: Session) -> bool:
    return db.query(NotificationSettings.id).filter(NotificationSettings.motivation_enabled.is_(True)).first() is not None


def count_pending_today(db: Session, user_id: int) -> int:
    return (
        db.query(func.count(Todo.id))
        .filter(Todo.user_id == user_id, Todo.scheduled_date == today(), Todo.is_completed.is_(False))
        .scalar()
    )


def count_overdue(db: Session, user_id: int) -> int:
    return (
        db.query(func.count(Todo.id))
        .filter(Todo.user_id == user_id, Todo.scheduled_date < today(), Todo.is_completed.is_(False))
        .scalar()
    )
