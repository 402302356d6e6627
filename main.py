import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy.sql import text

from quiz_api.core.config import settings
from quiz_api.core.logging_config import setup_logging

# Configure logging VERY early
setup_logging(settings.log_level)

from quiz_api.db.database import engine, get_db
from quiz_api.db.models import Base
from quiz_api.routers import assessment as assessment_router
from quiz_api.routers import entries as entries_router
from quiz_api.services.session_store import get_session_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Quiz service starting up...")

    # Create the entries table if missing
    Base.metadata.create_all(bind=engine)

    # Load and validate the question bank now so a bad bank stops startup
    registry = get_session_registry()
    logger.info(f"Question bank ready: {registry.bank.count()} questions from {settings.question_bank_path}")

    yield

    logger.info("Quiz service shutting down...")
    engine.dispose()


app = FastAPI(title="Cognitive Bias Calibration Quiz", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(assessment_router.router, prefix="/api/v1", tags=["assessment"])
app.include_router(entries_router.router, prefix="/api/v1", tags=["entries"])


@app.get("/", tags=["Health Check"])
async def read_root():
    """
    Root endpoint for basic health check.
    """
    return {
        "status": "ok",
        "message": "Cognitive Bias Calibration Quiz is running.",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health/db", tags=["Health Check"])
def health_check_db(db: Session = Depends(get_db)):
    """
    Performs a database connection health check.
    """
    try:
        result = db.execute(text("SELECT 1")).scalar_one()
        logger.info(f"DB health check successful (SELECT 1 returned: {result})")
        return {"status": "ok", "db_check": result}
    except Exception as e:
        logger.error(f"DB health check failed: {e}", exc_info=True)
        # Raise 503 Service Unavailable if DB connection fails
        raise HTTPException(status_code=503, detail=f"Database connection error: {e}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
