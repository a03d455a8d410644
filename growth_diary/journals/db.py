from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from growth_diary.activity.db import log_activity
from growth_diary.core.clock import today
from growth_diary.journals.models import JournalEntry, JournalImage
from growth_diary.journals.schemas import JournalEntryCreate, JournalEntryUpdate


# Journal CRUD
def get_journal(db: Session, journal_id: int, user_id: int) -> Optional[JournalEntry]:
    return db.query(JournalEntry).filter(
        JournalEntry.id == journal_id,
        JournalEntry.user_id == user_id
    ).first()


def get_user_journals(
    db: Session,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    mood: Optional[str] = None,
    search: Optional[str] = None,
) -> List[JournalEntry]:
    query = db.query(JournalEntry).options(selectinload(JournalEntry.images)).filter(
        JournalEntry.user_id == user_id
    )
    if start_date:
        query = query.filter(JournalEntry.entry_date >= start_date)
    if end_date:
        query = query.filter(JournalEntry.entry_date <= end_date)
    if mood:
        query = query.filter(JournalEntry.mood == mood)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(JournalEntry.title.like(pattern), JournalEntry.content.like(pattern)))

    return query.order_by(
        JournalEntry.entry_date.desc(),
        JournalEntry.created_at.desc(),
        JournalEntry.id.desc(),
    ).all()


def create_journal(db: Session, journal: JournalEntryCreate, user_id: int) -> JournalEntry:
    new_journal = JournalEntry(
        user_id=user_id,
        title=journal.title,
        content=journal.content,
        mood=journal.mood,
        mood_note=journal.mood_note,
        entry_date=journal.entry_date or today(),
    )
    db.add(new_journal)
    log_activity(db, user_id, "journal", f"Created journal entry: {journal.title or 'Untitled'}", commit=False)
    db.commit()
    db.refresh(new_journal)
    return new_journal


def update_journal(db: Session, journal_id: int, updated_journal: JournalEntryUpdate, user_id: int) -> Optional[JournalEntry]:
    journal = get_journal(db, journal_id, user_id)
    if journal:
        journal.title = updated_journal.title
        journal.content = updated_journal.content
        journal.mood = updated_journal.mood
        journal.mood_note = updated_journal.mood_note
        if updated_journal.entry_date is not None:
            journal.entry_date = updated_journal.entry_date
        db.commit()
        db.refresh(journal)
        return journal
    return None


def delete_journal(db: Session, journal_id: int, user_id: int) -> Optional[Tuple[JournalEntry, List[str]]]:
    """
    Deletes the entry and its image rows. Returns the entry together with the
    filenames whose files the caller should remove from disk.
    """
    journal = get_journal(db, journal_id, user_id)
    if journal:
        filenames = [image.filename for image in journal.images]
        db.delete(journal)
        db.commit()
        return journal, filenames
    return None


# Images
def add_journal_images(db: Session, journal: JournalEntry, files: List[Tuple[str, str]]) -> List[JournalImage]:
    images = [
        JournalImage(journal_id=journal.id, filename=filename, original_name=original_name)
        for filename, original_name in files
    ]
    db.add_all(images)
    db.commit()
    for image in images:
        db.refresh(image)
    return images


def get_journal_image(db: Session, journal_id: int, image_id: int, user_id: int) -> Optional[JournalImage]:
    return (
        db.query(JournalImage)
        .join(JournalEntry, JournalImage.journal_id == JournalEntry.id)
        .filter(
            JournalImage.id == image_id,
            JournalImage.journal_id == journal_id,
            JournalEntry.user_id == user_id,
        )
        .first()
    )


def delete_journal_image(db: Session, image: JournalImage) -> None:
    db.delete(image)
    db.commit()
