from datetime import datetime, timezone
from fastapi import APIRouter
from app.core.config.settings import settings


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_router():
    return {
        "status": "Server is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.app.ENV,
    }
