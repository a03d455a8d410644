from typing import List, Optional

from sqlalchemy.orm import Session, selectinload
from growth_diary.activity.db import log_activity
from growth_diary.core.clock import utcnow
from growth_diary.goals.models import Goal, GoalMilestone
from growth_diary.goals.schemas import GoalCreate, GoalUpdate


def progress_from_milestones(completed: int, total: int) -> int:
    """
    Percentage of completed milestones, rounded half up.

    Args:
        completed (int): Completed milestone count.
        total (int): Milestone count, must be positive.

    Returns:
        int: Progress between 0 and 100.
    """
    return (completed * 200 + total) // (total * 2)


def create_goal(db: Session, goal: GoalCreate, user_id: int) -> Goal:
    """
    Creates a new goal for the user, with any non-blank inline milestones.

    Args:
        db (Session): SQLAlchemy session.
        goal (GoalCreate): Input data for the goal.
        user_id (int): ID of the user.

    Returns:
        Goal: The created goal object.
    """
    new_goal = Goal(
        user_id=user_id,
        title=goal.title,
        description=goal.description or None,
        goal_type=goal.goal_type,
        target_date=goal.target_date,
    )
    for draft in goal.milestones or []:
        if draft.title and draft.title.strip():
            new_goal.milestones.append(GoalMilestone(title=draft.title.strip()))

    db.add(new_goal)
    db.commit()
    db.refresh(new_goal)
    return new_goal


def get_goal(db: Session, goal_id: int, user_id: int) -> Optional[Goal]:
    """
    Retrieves a goal by ID for the user.

    Args:
        db (Session): SQLAlchemy session.
        goal_id (int): ID of the goal.
        user_id (int): ID of the user.

    Returns:
        Optional[Goal]: The goal if found, else None.
    """
    return db.query(Goal).filter(
        Goal.id == goal_id,
        Goal.user_id == user_id
    ).first()


def get_user_goals(
    db: Session,
    user_id: int,
    goal_type: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Goal]:
    """
    Retrieves the user's goals, newest first, with milestones preloaded.

    Args:
        db (Session): SQLAlchemy session.
        user_id (int): ID of the user.
        goal_type (str): Optional short-term / long-term filter.
        status (str): Optional status filter.

    Returns:
        List[Goal]: List of goals.
    """
    query = db.query(Goal).options(selectinload(Goal.milestones)).filter(Goal.user_id == user_id)
    if goal_type:
        query = query.filter(Goal.goal_type == goal_type)
    if status:
        query = query.filter(Goal.status == status)
    return query.order_by(Goal.created_at.desc(), Goal.id.desc()).all()


def update_goal(db: Session, goal_id: int, updated_goal: GoalUpdate, user_id: int) -> Optional[Goal]:
    """
    Applies a partial update. A progress change is recorded in the activity
    log; moving to "completed" stamps completed_at.

    Args:
        db (Session): SQLAlchemy session.
        goal_id (int): ID of the goal to update.
        updated_goal (GoalUpdate): Update payload.
        user_id (int): ID of the user.

    Returns:
        Optional[Goal]: Updated goal if successful, else None.
    """
    goal = get_goal(db, goal_id, user_id)
    if goal is None:
        return None

    update_data = updated_goal.model_dump(exclude_unset=True)
    if update_data.get("title") is None:
        update_data.pop("title", None)
    if update_data.get("progress") is None:
        update_data.pop("progress", None)
    if update_data.get("status") is None:
        update_data.pop("status", None)

    for field, value in update_data.items():
        setattr(goal, field, value)

    if "progress" in update_data:
        log_activity(
            db, user_id, "goal_progress",
            f'Goal "{goal.title}" progress: {update_data["progress"]}%',
            commit=False,
        )
    if update_data.get("status") == "completed":
        goal.completed_at = utcnow()

    goal.updated_at = utcnow()
    db.commit()
    db.refresh(goal)
    return goal


def delete_goal(db: Session, goal_id: int, user_id: int) -> Optional[Goal]:
    """
    Deletes a single goal (and its milestones) by ID for the user.

    Returns:
        Optional[Goal]: Deleted goal or None.
    """
    goal = get_goal(db, goal_id, user_id)
    if goal:
        db.delete(goal)
        db.commit()
        return goal
    return None


# Milestones
def add_milestone(db: Session, goal_id: int, title: str, user_id: int) -> Optional[GoalMilestone]:
    goal = get_goal(db, goal_id, user_id)
    if goal is None:
        return None
    milestone = GoalMilestone(goal_id=goal.id, title=title)
    db.add(milestone)
    db.commit()
    db.refresh(milestone)
    return milestone


def get_milestone(db: Session, goal_id: int, milestone_id: int, user_id: int) -> Optional[GoalMilestone]:
    return (
        db.query(GoalMilestone)
        .join(Goal, GoalMilestone.goal_id == Goal.id)
        .filter(
            GoalMilestone.id == milestone_id,
            GoalMilestone.goal_id == goal_id,
            Goal.user_id == user_id,
        )
        .first()
    )


def recompute_goal_progress(db: Session, goal: Goal) -> None:
    total = len(goal.milestones)
    if total > 0:
        completed = sum(1 for m in goal.milestones if m.is_completed)
        goal.progress = progress_from_milestones(completed, total)
        goal.updated_at = utcnow()


def toggle_milestone(db: Session, goal_id: int, milestone_id: int, user_id: int) -> Optional[GoalMilestone]:
    """
    Flips a milestone's completion flag and recomputes the parent goal's
    progress from the completed / total milestone ratio.
    """
    milestone = get_milestone(db, goal_id, milestone_id, user_id)
    if milestone is None:
        return None

    milestone.is_completed = not milestone.is_completed
    milestone.completed_at = utcnow() if milestone.is_completed else None
    db.flush()

    goal = milestone.goal
    db.refresh(goal, attribute_names=["milestones"])
    recompute_goal_progress(db, goal)

    db.commit()
    db.refresh(milestone)
    return milestone


def delete_milestone(db: Session, goal_id: int, milestone_id: int, user_id: int) -> Optional[GoalMilestone]:
    milestone = get_milestone(db, goal_id, milestone_id, user_id)
    if milestone is None:
        return None

    goal = milestone.goal
    db.delete(milestone)
    db.flush()
    db.refresh(goal, attribute_names=["milestones"])
    recompute_goal_progress(db, goal)
    db.commit()
    return milestone
