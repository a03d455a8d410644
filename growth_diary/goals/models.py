from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from growth_diary.core.clock import utcnow
from growth_diary.core.database import Base

GOAL_TYPES = ("short-term", "long-term")
GOAL_STATUSES = ("active", "completed", "paused", "cancelled")


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("goal_type IN ('short-term', 'long-term')", name="ck_goal_type"),
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_goal_progress"),
        CheckConstraint("status IN ('active', 'completed', 'paused', 'cancelled')", name="ck_goal_status"),
        Index("idx_goals_user_type", "user_id", "goal_type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    goal_type = Column(String, nullable=False)
    target_date = Column(Date, nullable=True)
    progress = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="active")

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    completed_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="goals")
    milestones = relationship(
        "GoalMilestone",
        back_populates="goal",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="GoalMilestone.id",
    )


class GoalMilestone(Base):
    __tablename__ = "goal_milestones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    goal = relationship("Goal", back_populates="milestones")
