from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session
from growth_diary.activity.db import log_activity
from growth_diary.core.clock import today, utcnow
from growth_diary.todos.models import Todo, priority_rank
from growth_diary.todos.schemas import TodoCreate, TodoUpdate

UPCOMING_DAYS = 7


def get_todo(db: Session, todo_id: int, user_id: int) -> Optional[Todo]:
    return db.query(Todo).filter(
        Todo.id == todo_id,
        Todo.user_id == user_id
    ).first()


def get_user_todos(
    db: Session,
    user_id: int,
    on_date: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    completed: Optional[bool] = None,
    priority: Optional[str] = None,
) -> List[Todo]:
    query = db.query(Todo).filter(Todo.user_id == user_id)
    if on_date:
        query = query.filter(Todo.scheduled_date == on_date)
    if start_date:
        query = query.filter(Todo.scheduled_date >= start_date)
    if end_date:
        query = query.filter(Todo.scheduled_date <= end_date)
    if completed is not None:
        query = query.filter(Todo.is_completed == completed)
    if priority:
        query = query.filter(Todo.priority == priority)

    return query.order_by(Todo.scheduled_date.asc(), priority_rank, Todo.created_at.asc(), Todo.id.asc()).all()


def get_todays_todos(db: Session, user_id: int) -> List[Todo]:
    return (
        db.query(Todo)
        .filter(Todo.user_id == user_id, Todo.scheduled_date == today())
        .order_by(priority_rank, Todo.created_at.asc(), Todo.id.asc())
        .all()
    )


def get_pending_todos(db: Session, user_id: int) -> List[Todo]:
    """Today's incomplete todos, most urgent first."""
    return (
        db.query(Todo)
        .filter(Todo.user_id == user_id, Todo.scheduled_date == today(), Todo.is_completed.is_(False))
        .order_by(priority_rank, Todo.id.asc())
        .all()
    )


def get_overdue_todos(db: Session, user_id: int) -> List[Todo]:
    return (
        db.query(Todo)
        .filter(Todo.user_id == user_id, Todo.scheduled_date < today(), Todo.is_completed.is_(False))
        .order_by(Todo.scheduled_date.asc(), Todo.id.asc())
        .all()
    )


def get_upcoming_todos(db: Session, user_id: int) -> List[Todo]:
    start = today()
    end = start + timedelta(days=UPCOMING_DAYS)
    return (
        db.query(Todo)
        .filter(
            Todo.user_id == user_id,
            Todo.scheduled_date.between(start, end),
            Todo.is_completed.is_(False),
        )
        .order_by(Todo.scheduled_date.asc(), priority_rank, Todo.id.asc())
        .all()
    )


def create_todo(db: Session, todo: TodoCreate, user_id: int) -> Todo:
    new_todo = Todo(
        user_id=user_id,
        title=todo.title,
        description=todo.description or None,
        priority=todo.priority,
        scheduled_date=todo.scheduled_date,
    )
    db.add(new_todo)
    db.commit()
    db.refresh(new_todo)
    return new_todo


def update_todo(db: Session, todo_id: int, updated_todo: TodoUpdate, user_id: int) -> Optional[Todo]:
    todo = get_todo(db, todo_id, user_id)
    if todo:
        update_data = updated_todo.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field != "description":
                continue
            setattr(todo, field, value)
        todo.updated_at = utcnow()
        db.commit()
        db.refresh(todo)
        return todo
    return None


def toggle_todo(db: Session, todo_id: int, user_id: int) -> Optional[Todo]:
    """
    Flips the completion flag. Completing a todo is recorded in the activity log.
    """
    todo = get_todo(db, todo_id, user_id)
    if todo is None:
        return None

    todo.is_completed = not todo.is_completed
    todo.completed_at = utcnow() if todo.is_completed else None
    todo.updated_at = utcnow()
    if todo.is_completed:
        log_activity(db, user_id, "todo_completed", f"Completed: {todo.title}", commit=False)

    db.commit()
    db.refresh(todo)
    return todo


def delete_todo(db: Session, todo_id: int, user_id: int) -> Optional[Todo]:
    todo = get_todo(db, todo_id, user_id)
    if todo:
        db.delete(todo)
        db.commit()
        return todo
    return None


def bulk_complete_todos(db: Session, todo_ids: List[int], user_id: int) -> int:
    """Marks the user's todos among todo_ids as completed; other users' ids are ignored."""
    now = utcnow()
    count = (
        db.query(Todo)
        .filter(Todo.id.in_(todo_ids), Todo.user_id == user_id)
        .update(
            {Todo.is_completed: True, Todo.completed_at: now, Todo.updated_at: now},
            synchronize_session=False,
        )
    )
    db.commit()
    return count


def reschedule_overdue_todos(db: Session, new_date: date, user_id: int) -> int:
    count = (
        db.query(Todo)
        .filter(Todo.user_id == user_id, Todo.scheduled_date < today(), Todo.is_completed.is_(False))
        .update(
            {Todo.scheduled_date: new_date, Todo.updated_at: utcnow()},
            synchronize_session=False,
        )
    )
    db.commit()
    return count
