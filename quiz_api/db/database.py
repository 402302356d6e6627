import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from quiz_api.core.config import settings

logger = logging.getLogger(__name__)

# SQLite connections are shared across the threadpool that serves sync routes
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, echo=settings.sql_echo, connect_args=connect_args)

# Create a configured "Session" class
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency to provide a database session.

    Rolls back on error and always closes the session.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Error in get_db during yield: {e}", exc_info=True)
        db.rollback()
        # Reraise the exception so FastAPI handles it
        raise
    finally:
        db.close()
