from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String
from growth_diary.core.clock import today, utcnow
from growth_diary.core.database import Base

ACTIVITY_TYPES = ("journal", "todo_completed", "goal_progress", "login")


class ActivityLog(Base):
    """Append-only record used to derive heatmaps and streaks."""

    __tablename__ = "activity_log"
    __table_args__ = (
        CheckConstraint(
            "activity_type IN ('journal', 'todo_completed', 'goal_progress', 'login')",
            name="ck_activity_type",
        ),
        Index("idx_activity_user_date", "user_id", "activity_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    activity_type = Column(String, nullable=False)
    activity_date = Column(Date, nullable=False, default=today)
    details = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
