"""Health check endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from syncpanel.database import get_db
from syncpanel.logging_config import get_logger

logger = get_logger("syncpanel.routes.health")

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_check(db=Depends(get_db)):
    """Health check for load balancers; reports whether the settings database answers."""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        database = "unavailable"
    return {"status": "ok", "database": database}
