from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer
from sqlalchemy.orm import relationship
from growth_diary.core.database import Base

DEFAULT_REMINDER_TIMES = ["09:00", "14:00", "20:00"]
DEFAULT_PENDING_THRESHOLD = 3


class NotificationSettings(Base):
    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    reminder_enabled = Column(Boolean, nullable=False, default=True)
    reminder_times = Column(JSON, nullable=False, default=lambda: list(DEFAULT_REMINDER_TIMES))
    motivation_enabled = Column(Boolean, nullable=False, default=True)
    pending_threshold = Column(Integer, nullable=False, default=DEFAULT_PENDING_THRESHOLD)

    user = relationship("User", back_populates="notification_settings")
