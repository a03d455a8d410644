import re
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from growth_diary.goals.schemas import GoalBase
from growth_diary.todos.schemas import TodoBase

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class NotificationSettingsOut(BaseSchema):
    id: int
    user_id: int
    reminder_enabled: bool
    reminder_times: List[str]
    motivation_enabled: bool
    pending_threshold: int


class NotificationSettingsUpdate(BaseSchema):
    reminder_enabled: Optional[bool] = None
    reminder_times: Optional[List[str]] = None
    motivation_enabled: Optional[bool] = None
    pending_threshold: Optional[int] = Field(None, ge=1, le=10)

    @field_validator("reminder_times")
    @classmethod
    def check_times(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        for item in value:
            if not TIME_PATTERN.match(item):
                raise ValueError(f"Invalid reminder time: {item}")
        return value


class PendingItems(BaseModel):
    pendingTodos: List[TodoBase]
    overdueTodos: List[TodoBase]
    upcomingGoals: List[GoalBase]
