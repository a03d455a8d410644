from datetime import date
from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from growth_diary.auth.service import get_current_user_id
from growth_diary.core.database import get_db
from growth_diary.todos.schemas import (
    BulkCompleteRequest,
    Priority,
    RescheduleRequest,
    TodoBase,
    TodoCreate,
    TodoUpdate,
)
from growth_diary.todos.db import (
    bulk_complete_todos,
    create_todo,
    delete_todo,
    get_overdue_todos,
    get_todays_todos,
    get_upcoming_todos,
    get_user_todos,
    reschedule_overdue_todos,
    toggle_todo,
    update_todo,
)

router = APIRouter(prefix="/api/todos", tags=["Todos"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[TodoBase],
    summary="List todos",
    description="Todos ordered by date, then priority (urgent first), then creation time.",
    responses={
        200: {"description": "Todos retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve todos."},
    },
)
def get_todos_route(
    on_date: Optional[date] = Query(None, alias="date"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    completed: Optional[str] = None,
    priority: Optional[Priority] = None,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[TodoBase]:
    completed_filter = None if completed is None else completed == "true"
    try:
        return get_user_todos(db, user_id, on_date, start_date, end_date, completed_filter, priority)
    except Exception as e:
        logger.error(f"Error fetching todos for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch todos")


@router.get("/today", response_model=List[TodoBase], summary="Todos scheduled for today")
def get_today_todos_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[TodoBase]:
    try:
        return get_todays_todos(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching today's todos for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch todos")


@router.get("/overdue", response_model=List[TodoBase], summary="Incomplete todos scheduled before today")
def get_overdue_todos_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[TodoBase]:
    try:
        return get_overdue_todos(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching overdue todos for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch overdue todos")


@router.get("/upcoming", response_model=List[TodoBase], summary="Incomplete todos for the next 7 days")
def get_upcoming_todos_route(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[TodoBase]:
    try:
        return get_upcoming_todos(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching upcoming todos for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch upcoming todos")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Dict[str, Any],
    summary="Create a todo",
    responses={
        201: {"description": "Todo created."},
        400: {"description": "Validation error."},
        401: {"description": "Unauthorized."},
    },
)
def create_todo_route(
    todo: TodoCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        created = create_todo(db, todo, user_id)
        return {"message": "Todo created", "id": created.id}
    except Exception as e:
        logger.error(f"Error creating todo for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create todo")


@router.post(
    "/bulk-complete",
    response_model=Dict[str, Any],
    summary="Complete several todos at once",
    responses={
        200: {"description": "Todos completed."},
        400: {"description": "Missing or empty id list."},
    },
)
def bulk_complete_route(
    req: BulkCompleteRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        count = bulk_complete_todos(db, req.ids, user_id)
        return {"message": "Todos completed", "count": count}
    except Exception as e:
        logger.error(f"Bulk complete failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to complete todos")


@router.post(
    "/reschedule-overdue",
    response_model=Dict[str, Any],
    summary="Move every overdue todo to a new date",
    responses={
        200: {"description": "Overdue todos rescheduled."},
        400: {"description": "New date is required."},
    },
)
def reschedule_overdue_route(
    req: RescheduleRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        count = reschedule_overdue_todos(db, req.new_date, user_id)
        return {"message": "Overdue todos rescheduled", "count": count}
    except Exception as e:
        logger.error(f"Reschedule failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to reschedule todos")


@router.put(
    "/{todo_id}",
    response_model=Dict[str, str],
    summary="Update a todo",
    responses={
        200: {"description": "Todo updated."},
        400: {"description": "Validation error."},
        404: {"description": "Todo not found."},
    },
)
def update_todo_route(
    todo_id: int,
    todo: TodoUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        updated = update_todo(db, todo_id, todo, user_id)
        if updated is None:
            raise HTTPException(status_code=404, detail="Todo not found")
        return {"message": "Todo updated"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating todo {todo_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update todo")


@router.patch(
    "/{todo_id}/toggle",
    response_model=Dict[str, Any],
    summary="Toggle todo completion",
    responses={
        200: {"description": "Todo updated."},
        404: {"description": "Todo not found."},
    },
)
def toggle_todo_route(
    todo_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        todo = toggle_todo(db, todo_id, user_id)
        if todo is None:
            raise HTTPException(status_code=404, detail="Todo not found")
        return {"message": "Todo updated", "is_completed": todo.is_completed}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error toggling todo {todo_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update todo")


@router.delete(
    "/{todo_id}",
    response_model=Dict[str, str],
    summary="Delete a todo",
    responses={
        200: {"description": "Todo deleted."},
        404: {"description": "Todo not found."},
    },
)
def delete_todo_route(
    todo_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        deleted = delete_todo(db, todo_id, user_id)
        if deleted is None:
            raise HTTPException(status_code=404, detail="Todo not found")
        return {"message": "Todo deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting todo {todo_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete todo")
