import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from quiz_api.db.models import Entry

logger = logging.getLogger(__name__)


def create_entry(db: Session, text: str) -> Entry:
    """Stores one free-text entry and returns it with its id and timestamp loaded."""
    entry = Entry(text=text)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info(f"Stored entry {entry.id} ({len(text)} characters)")
    return entry


def list_entries(db: Session) -> List[Entry]:
    """All entries, newest first. Entries created in the same instant fall back to id order."""
    stmt = select(Entry).order_by(Entry.created_at.desc(), Entry.id.desc())
    return list(db.execute(stmt).scalars().all())
