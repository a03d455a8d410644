from typing import Optional

from sqlalchemy.orm import Session
from growth_diary.activity.models import ACTIVITY_TYPES, ActivityLog
from growth_diary.core.clock import today


def log_activity(
    db: Session,
    user_id: int,
    activity_type: str,
    details: Optional[str] = None,
    commit: bool = True,
) -> ActivityLog:
    """
    Appends an activity for today. Pass commit=False to fold the insert into
    the caller's transaction.
    """
    if activity_type not in ACTIVITY_TYPES:
        raise ValueError(f"Unknown activity type: {activity_type}")

    entry = ActivityLog(
        user_id=user_id,
        activity_type=activity_type,
        activity_date=today(),
        details=details,
    )
    db.add(entry)
    if commit:
        db.commit()
    return entry
