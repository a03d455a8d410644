from datetime import date
from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from growth_diary.auth.service import get_current_user_id
from growth_diary.core.config import MAX_IMAGES_PER_UPLOAD
from growth_diary.core.database import get_db
from growth_diary.journals.schemas import (
    JournalEntryCreate,
    JournalEntryDetail,
    JournalEntryListItem,
    JournalEntryUpdate,
    JournalImageOut,
    Mood,
)
from growth_diary.journals.db import (
    add_journal_images,
    create_journal,
    delete_journal,
    delete_journal_image,
    get_journal,
    get_journal_image,
    get_user_journals,
    update_journal,
)
from growth_diary.journals.storage import remove_image, save_image

router = APIRouter(prefix="/api/journal", tags=["Journal"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[JournalEntryListItem],
    summary="List journal entries",
    description="Entries for the logged-in user, newest first, optionally filtered by date range, mood or text.",
    responses={
        200: {"description": "Journal entries retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve journal entries."},
    },
)
def get_journals_route(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    mood: Optional[Mood] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[JournalEntryListItem]:
    try:
        entries = get_user_journals(db, user_id, start_date, end_date, mood, search)
        return [JournalEntryListItem.from_entry(entry) for entry in entries]
    except Exception as e:
        logger.error(f"Error fetching journals for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch journal entries")


@router.get(
    "/{journal_id}",
    response_model=JournalEntryDetail,
    summary="Get a journal entry by ID",
    responses={
        200: {"description": "Journal retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to retrieve journal."},
    },
)
def read_journal_route(
    journal_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> JournalEntryDetail:
    try:
        journal = get_journal(db, journal_id, user_id)
        if journal is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        return JournalEntryDetail.model_validate(journal)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving journal {journal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch journal entry")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Dict[str, Any],
    summary="Create a new journal entry",
    responses={
        201: {"description": "Journal created successfully."},
        400: {"description": "Validation error."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to create journal."},
    },
)
def create_journal_route(
    journal: JournalEntryCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        created = create_journal(db, journal, user_id)
        return {"message": "Journal entry created", "id": created.id}
    except Exception as e:
        logger.error(f"Error creating journal for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create journal entry")


@router.put(
    "/{journal_id}",
    response_model=Dict[str, str],
    summary="Update a journal entry",
    responses={
        200: {"description": "Journal updated successfully."},
        400: {"description": "Validation error."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to update journal."},
    },
)
def update_journal_route(
    journal_id: int,
    journal: JournalEntryUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        updated = update_journal(db, journal_id, journal, user_id)
        if updated is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        return {"message": "Journal entry updated"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating journal {journal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update journal entry")


@router.delete(
    "/{journal_id}",
    response_model=Dict[str, str],
    summary="Delete a journal entry",
    description="Deletes the entry together with its attached image files.",
    responses={
        200: {"description": "Journal deleted successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to delete journal."},
    },
)
def delete_journal_route(
    journal_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        deleted = delete_journal(db, journal_id, user_id)
        if deleted is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        _, filenames = deleted
        for filename in filenames:
            remove_image(filename)
        return {"message": "Journal entry deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting journal {journal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete journal entry")


@router.post(
    "/{journal_id}/images",
    status_code=status.HTTP_201_CREATED,
    response_model=Dict[str, Any],
    summary="Attach images to a journal entry",
    responses={
        201: {"description": "Images stored."},
        400: {"description": "Not an image, too large, or too many files."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
    },
)
def upload_journal_images_route(
    journal_id: int,
    images: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, Any]:
    journal = get_journal(db, journal_id, user_id)
    if journal is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    if len(images) > MAX_IMAGES_PER_UPLOAD:
        raise HTTPException(status_code=400, detail=f"At most {MAX_IMAGES_PER_UPLOAD} images per upload")

    stored = []
    try:
        for upload in images:
            stored.append(save_image(upload))
        created = add_journal_images(db, journal, stored)
    except HTTPException:
        for filename, _ in stored:
            remove_image(filename)
        raise
    except Exception as e:
        for filename, _ in stored:
            remove_image(filename)
        logger.error(f"Error storing images for journal {journal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to store images")

    return {
        "message": "Images uploaded",
        "images": [JournalImageOut.model_validate(image).model_dump(mode="json") for image in created],
    }


@router.delete(
    "/{journal_id}/images/{image_id}",
    response_model=Dict[str, str],
    summary="Delete one image from a journal entry",
    responses={
        200: {"description": "Image deleted."},
        401: {"description": "Unauthorized."},
        404: {"description": "Image not found."},
    },
)
def delete_journal_image_route(
    journal_id: int,
    image_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict[str, str]:
    try:
        image = get_journal_image(db, journal_id, image_id, user_id)
        if image is None:
            raise HTTPException(status_code=404, detail="Image not found")
        filename = image.filename
        delete_journal_image(db, image)
        remove_image(filename)
        return {"message": "Image deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting image {image_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete image")
