from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String, case
from sqlalchemy.orm import relationship
from growth_diary.core.clock import utcnow
from growth_diary.core.database import Base

PRIORITIES = ("low", "medium", "high", "urgent")
PRIORITY_RANK = {"urgent": 1, "high": 2, "medium": 3, "low": 4}


class Todo(Base):
    __tablename__ = "todos"
    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_todo_priority"),
        Index("idx_todos_user_date", "user_id", "scheduled_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    priority = Column(String, nullable=False, default="medium")
    scheduled_date = Column(Date, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="todos")


# urgent first, unknown values last
priority_rank = case(PRIORITY_RANK, value=Todo.priority, else_=4)
