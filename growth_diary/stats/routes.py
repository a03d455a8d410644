from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from growth_diary.auth.service import get_current_user_id
from growth_diary.core.clock import today, utcnow
from growth_diary.core.database import get_db
from growth_diary.stats.db import (
    export_user_data,
    get_dashboard_stats,
    get_goal_stats,
    get_heatmap,
    get_mood_stats,
    get_streaks,
    get_todo_stats,
)
from growth_diary.stats.schemas import DashboardStats, Period, StreakInfo

router = APIRouter(prefix="/api/stats", tags=["Stats"])
logger = logging.getLogger(__name__)


@router.get("/dashboard", response_model=DashboardStats, summary="Numbers for the dashboard cards")
def dashboard_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> DashboardStats:
    try:
        return DashboardStats(**get_dashboard_stats(db, user_id))
    except Exception as e:
        logger.error(f"Dashboard stats failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats")


@router.get(
    "/heatmap",
    response_model=Dict[str, int],
    summary="Activity counts per day",
    description="Maps ISO dates of the given year (default: current) to the number of recorded activities.",
)
def heatmap_route(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, int]:
    try:
        return get_heatmap(db, user_id, year or today().year)
    except Exception as e:
        logger.error(f"Heatmap failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch heatmap data")


@router.get("/todos", response_model=List[Dict[str, Any]], summary="Todo completion per day, week or month")
def todo_stats_route(
    period: Period = "month",
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[Dict[str, Any]]:
    try:
        return get_todo_stats(db, user_id, period)
    except Exception as e:
        logger.error(f"Todo stats failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch todo stats")


@router.get("/goals", response_model=Dict[str, Any], summary="Recent goals and completion rates")
def goal_stats_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        return get_goal_stats(db, user_id)
    except Exception as e:
        logger.error(f"Goal stats failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch goal stats")


@router.get("/mood", response_model=Dict[str, Any], summary="Mood trend and distribution")
def mood_stats_route(
    days: int = Query(30, ge=1, le=3650),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        return get_mood_stats(db, user_id, days)
    except Exception as e:
        logger.error(f"Mood stats failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch mood stats")


@router.get("/streaks", response_model=StreakInfo, summary="Current and longest activity streak")
@router.get("/streak", response_model=StreakInfo, include_in_schema=False)
def streaks_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> StreakInfo:
    try:
        return StreakInfo(**get_streaks(db, user_id))
    except Exception as e:
        logger.error(f"Streaks failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch streaks")


@router.get("/export", response_model=Dict[str, Any], summary="Download all of the user's data")
def export_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        return {"exportDate": utcnow().isoformat() + "Z", **export_user_data(db, user_id)}
    except Exception as e:
        logger.error(f"Export failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to export data")
