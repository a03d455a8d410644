from typing import Dict
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from growth_diary.auth.service import get_current_user_id
from growth_diary.core.database import get_db
from growth_diary.notifications.db import get_or_create_settings, get_upcoming_goals, update_settings
from growth_diary.notifications.schemas import NotificationSettingsOut, NotificationSettingsUpdate, PendingItems
from growth_diary.todos.db import get_overdue_todos, get_pending_todos

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])
logger = logging.getLogger(__name__)


@router.get(
    "/settings",
    response_model=NotificationSettingsOut,
    summary="Get notification settings",
    description="Returns the user's settings, creating the defaults on first access.",
)
def get_settings_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> NotificationSettingsOut:
    try:
        return get_or_create_settings(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching notification settings for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch settings")


@router.put(
    "/settings",
    response_model=Dict[str, str],
    summary="Update notification settings",
    responses={
        200: {"description": "Settings updated."},
        400: {"description": "Validation error."},
    },
)
def update_settings_route(
    update: NotificationSettingsUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        update_settings(db, user_id, update)
        return {"message": "Settings updated"}
    except Exception as e:
        logger.error(f"Error updating notification settings for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update settings")


@router.get(
    "/pending",
    response_model=PendingItems,
    summary="Items worth a reminder",
    description="Today's incomplete todos, overdue todos and active goals due within a week.",
)
def get_pending_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> PendingItems:
    try:
        return PendingItems(
            pendingTodos=get_pending_todos(db, user_id),
            overdueTodos=get_overdue_todos(db, user_id),
            upcomingGoals=get_upcoming_goals(db, user_id),
        )
    except Exception as e:
        logger.error(f"Error fetching pending items for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch pending items")
