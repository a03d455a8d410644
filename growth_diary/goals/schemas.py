from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

GoalType = Literal["short-term", "long-term"]
GoalStatus = Literal["active", "completed", "paused", "cancelled"]


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


def _required_title(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("Title is required")
    return value


class MilestoneBase(BaseSchema):
    id: int
    goal_id: int
    title: str
    is_completed: bool
    completed_at: Optional[datetime] = None
    created_at: datetime


class MilestoneCreate(BaseSchema):
    title: str

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Milestone title is required")
        return value


class MilestoneDraft(BaseSchema):
    """Milestone given inline on goal creation; blank titles are skipped."""
    title: Optional[str] = None


class GoalBase(BaseSchema):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    goal_type: GoalType
    target_date: Optional[date] = None
    progress: int
    status: GoalStatus
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None


class GoalResponse(GoalBase):
    total_milestones: int = 0
    completed_milestones: int = 0
    milestones: List[MilestoneBase] = []

    @classmethod
    def from_goal(cls, goal) -> "GoalResponse":
        data = GoalBase.model_validate(goal).model_dump()
        milestones = [MilestoneBase.model_validate(m) for m in goal.milestones]
        return cls(
            **data,
            total_milestones=len(milestones),
            completed_milestones=sum(1 for m in milestones if m.is_completed),
            milestones=milestones,
        )


class GoalCreate(BaseSchema):
    title: str
    description: Optional[str] = None
    goal_type: GoalType
    target_date: Optional[date] = None
    milestones: Optional[List[MilestoneDraft]] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _required_title(value)


class GoalUpdate(BaseSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[date] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[GoalStatus] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _required_title(value)
