from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.endpoints import waitlisters
from app.core.config import Settings
from app.core.database import Database, get_database
from app.core.deps import get_settings

api_router = APIRouter()

api_router.include_router(waitlisters.router)


@api_router.get("/health")
def health_check(database: Database = Depends(get_database), settings: Settings = Depends(get_settings)):
    return {
        "status": "OK",
        "message": "WanderBlocks API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "database": "up" if database.ping() else "down",
    }
