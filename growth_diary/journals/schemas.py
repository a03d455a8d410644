from typing import List, Literal, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator

Mood = Literal["amazing", "good", "neutral", "bad", "terrible"]


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class JournalImageOut(BaseSchema):
    id: int
    journal_id: int
    filename: str
    original_name: str
    created_at: datetime


class JournalEntryBase(BaseSchema):
    id: int
    user_id: int
    title: Optional[str] = None
    content: str
    mood: Optional[Mood] = None
    mood_note: Optional[str] = None
    entry_date: date
    created_at: datetime
    updated_at: datetime


class JournalEntryListItem(JournalEntryBase):
    """List rows carry image filenames only."""
    images: List[str] = []

    @classmethod
    def from_entry(cls, entry) -> "JournalEntryListItem":
        data = JournalEntryBase.model_validate(entry).model_dump()
        data["images"] = [image.filename for image in entry.images]
        return cls(**data)


class JournalEntryDetail(JournalEntryBase):
    images: List[JournalImageOut] = []


class JournalEntryWrite(BaseSchema):
    title: Optional[str] = Field(None, max_length=200)
    content: str
    mood: Optional[Mood] = None
    mood_note: Optional[str] = None
    entry_date: Optional[date] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("content")
    @classmethod
    def check_content(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Content is required")
        return value

    @field_validator("mood", "mood_note", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return value or None


class JournalEntryCreate(JournalEntryWrite):
    pass


class JournalEntryUpdate(JournalEntryWrite):
    pass
