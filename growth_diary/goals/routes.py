from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from growth_diary.auth.service import get_current_user_id
from growth_diary.goals.schemas import (
    GoalCreate,
    GoalResponse,
    GoalStatus,
    GoalType,
    GoalUpdate,
    MilestoneCreate,
)
from growth_diary.goals.db import (
    add_milestone,
    create_goal,
    delete_goal,
    delete_milestone,
    get_goal,
    get_user_goals,
    toggle_milestone,
    update_goal,
)
from growth_diary.core.database import get_db

router = APIRouter(prefix="/api/goals", tags=["Goals"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[GoalResponse],
    summary="Get all user goals",
    description="Retrieve the authenticated user's goals with milestone counts, optionally filtered by type and status.",
    responses={
        200: {"description": "Goals retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve goals."},
    },
)
def read_user_goals_route(
    goal_type: Optional[GoalType] = Query(None, alias="type"),
    goal_status: Optional[GoalStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[GoalResponse]:
    try:
        goals = get_user_goals(db, user_id, goal_type, goal_status)
        return [GoalResponse.from_goal(goal) for goal in goals]
    except Exception as e:
        logger.error(f"Failed to fetch goals for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch goals")


@router.get(
    "/{goal_id}",
    response_model=GoalResponse,
    summary="Get a specific goal",
    description="Retrieve a specific goal and its milestones.",
    responses={
        200: {"description": "Goal retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Goal not found."},
    },
)
def read_goal_route(
    goal_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> GoalResponse:
    goal = get_goal(db, goal_id, user_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return GoalResponse.from_goal(goal)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Dict[str, Any],
    summary="Create a new goal",
    description="Create a goal for the authenticated user, optionally with initial milestones.",
    responses={
        201: {"description": "Goal created successfully."},
        400: {"description": "Validation error."},
        401: {"description": "Unauthorized."},
        500: {"description": "Goal creation failed."},
    },
)
def create_goal_route(
    goal: GoalCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        created = create_goal(db, goal, user_id)
        return {"message": "Goal created", "id": created.id}
    except Exception as e:
        logger.error(f"Failed to create goal for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create goal")


@router.put(
    "/{goal_id}",
    response_model=Dict[str, str],
    summary="Update an existing goal",
    description="Partially update a goal's details, progress or status.",
    responses={
        200: {"description": "Goal updated successfully."},
        400: {"description": "Validation error."},
        401: {"description": "Unauthorized."},
        404: {"description": "Goal not found."},
        500: {"description": "Failed to update goal."},
    },
)
def update_goal_route(
    goal_id: int,
    goal: GoalUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        updated = update_goal(db, goal_id, goal, user_id)
        if updated is None:
            raise HTTPException(status_code=404, detail="Goal not found")
        return {"message": "Goal updated"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update goal {goal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update goal")


@router.delete(
    "/{goal_id}",
    response_model=Dict[str, str],
    summary="Delete a goal",
    responses={
        200: {"description": "Goal deleted successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Goal not found."},
        500: {"description": "Failed to delete goal."},
    },
)
def delete_goal_route(
    goal_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        deleted = delete_goal(db, goal_id, user_id)
        if deleted is None:
            raise HTTPException(status_code=404, detail="Goal not found")
        return {"message": "Goal deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete goal {goal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete goal")


@router.post(
    "/{goal_id}/milestones",
    status_code=status.HTTP_201_CREATED,
    response_model=Dict[str, Any],
    summary="Add a milestone to a goal",
    responses={
        201: {"description": "Milestone added."},
        400: {"description": "Validation error."},
        404: {"description": "Goal not found."},
    },
)
def add_milestone_route(
    goal_id: int,
    milestone: MilestoneCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        created = add_milestone(db, goal_id, milestone.title, user_id)
        if created is None:
            raise HTTPException(status_code=404, detail="Goal not found")
        return {"message": "Milestone added", "id": created.id}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to add milestone to goal {goal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to add milestone")


@router.patch(
    "/{goal_id}/milestones/{milestone_id}/toggle",
    response_model=Dict[str, Any],
    summary="Toggle milestone completion",
    description="Flip a milestone's completion flag; the goal's progress is recomputed from its milestones.",
    responses={
        200: {"description": "Milestone updated."},
        404: {"description": "Milestone not found."},
    },
)
def toggle_milestone_route(
    goal_id: int,
    milestone_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        milestone = toggle_milestone(db, goal_id, milestone_id, user_id)
        if milestone is None:
            raise HTTPException(status_code=404, detail="Milestone not found")
        return {"message": "Milestone updated", "is_completed": milestone.is_completed}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to toggle milestone {milestone_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update milestone")


@router.delete(
    "/{goal_id}/milestones/{milestone_id}",
    response_model=Dict[str, str],
    summary="Delete a milestone",
    responses={
        200: {"description": "Milestone deleted."},
        404: {"description": "Milestone not found."},
    },
)
def delete_milestone_route(
    goal_id: int,
    milestone_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        deleted = delete_milestone(db, goal_id, milestone_id, user_id)
        if deleted is None:
            raise HTTPException(status_code=404, detail="Milestone not found")
        return {"message": "Milestone deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete milestone {milestone_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete milestone")
