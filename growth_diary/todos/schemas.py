from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

Priority = Literal["low", "medium", "high", "urgent"]


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class TodoBase(BaseSchema):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: Priority
    scheduled_date: date
    is_completed: bool
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class TodoCreate(BaseSchema):
    title: str
    description: Optional[str] = None
    priority: Priority = "medium"
    scheduled_date: date

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Title is required")
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, value):
        return value or "medium"


class TodoUpdate(BaseSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    scheduled_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be empty")
        return value


class BulkCompleteRequest(BaseSchema):
    ids: List[int]

    @field_validator("ids")
    @classmethod
    def check_ids(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("Invalid todo IDs")
        return value


class RescheduleRequest(BaseSchema):
    new_date: date = Field(..., alias="newDate")
