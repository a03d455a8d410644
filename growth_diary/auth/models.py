from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from growth_diary.core.clock import utcnow
from growth_diary.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    journals = relationship("JournalEntry", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    goals = relationship("Goal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    todos = relationship("Todo", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    activities = relationship("ActivityLog", cascade="all, delete-orphan", passive_deletes=True)
    notification_settings = relationship(
        "NotificationSettings", back_populates="user", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
