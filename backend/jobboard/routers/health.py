import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.config import get_settings
from jobboard.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Report database connectivity and whether reset emails can be sent."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Health check database probe failed: %s", e)
        db_status = "unhealthy"

    settings = get_settings()
    return {
        "status": "ok" if db_status == "healthy" else "degraded",
        "database": db_status,
        "mail": "configured" if settings.smtp_user and settings.smtp_password else "not configured",
    }
