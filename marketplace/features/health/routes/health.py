from fastapi import APIRouter, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from marketplace.platform.db.session import SessionLocal
from marketplace.platform.logger import get_logger
from marketplace.platform.response import api_response

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check database probe failed: {e}")
        return api_response(
            data={"status": "degraded", "service": "UFMarketPlace", "database": "unreachable"},
            message="Database is unreachable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return api_response(
        data={"status": "ok", "service": "UFMarketPlace", "database": "ok"},
        message="Service is healthy",
        status_code=status.HTTP_200_OK,
    )
