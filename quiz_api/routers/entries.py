import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quiz_api.db.database import get_db
from quiz_api.schemas.entries import EntryCreateRequest, EntryResponse
from quiz_api.services.storage import create_entry, list_entries

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/entries", response_model=EntryResponse)
def post_entry(request: EntryCreateRequest, db: Session = Depends(get_db)):
    """Stores a free-text entry and returns the stored record."""
    try:
        return create_entry(db, request.text)
    except SQLAlchemyError as e:
        logger.error(f"Failed to store entry: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Database error while storing entry")


@router.get("/entries", response_model=List[EntryResponse])
def get_entries(db: Session = Depends(get_db)):
    """Lists stored entries, newest first."""
    try:
        return list_entries(db)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list entries: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Database error while listing entries")
