from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from growth_diary.core.clock import today, utcnow
from growth_diary.core.database import Base

MOODS = ("amazing", "good", "neutral", "bad", "terrible")


class JournalEntry(Base):
    __tablename__ = "journal_entries"
    __table_args__ = (
        CheckConstraint(
            "mood IN ('amazing', 'good', 'neutral', 'bad', 'terrible')",
            name="ck_journal_mood",
        ),
        Index("idx_journal_user_date", "user_id", "entry_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    title = Column(String, nullable=True)
    content = Column(String, nullable=False)
    mood = Column(String, nullable=True)
    mood_note = Column(String, nullable=True)
    entry_date = Column(Date, nullable=False, default=today)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="journals")
    images = relationship(
        "JournalImage",
        back_populates="journal",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="JournalImage.id",
    )


class JournalImage(Base):
    __tablename__ = "journal_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    journal_id = Column(Integer, ForeignKey("journal_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String, nullable=False)
    original_name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    journal = relationship("JournalEntry", back_populates="images")
