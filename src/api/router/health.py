from fastapi import APIRouter, Request, status
from datetime import datetime, timezone

from src.core.logger.logger import get_logger
from src.infra.config.redis import ping_redis
from src.infra.config.settings import settings
from src.infra.database import get_database_manager

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """
    Health check endpoint.
    Reports database, Redis and WebSocket status.
    """
    database_ok = await get_database_manager().ping()
    redis_ok = await ping_redis()

    websocket_clients = 0
    if hasattr(request.app.state, "ws_manager"):
        websocket_clients = request.app.state.ws_manager.get_connection_count()

    services = {
        "database": "healthy" if database_ok else "unhealthy",
        "redis": "healthy" if redis_ok else "unhealthy",
        "websocket": f"{websocket_clients} clients connected"
    }
    overall_status = "healthy" if database_ok and redis_ok else "degraded"

    logger.info(
        "health_check",
        extra={
            "status": overall_status,
            "dependencies": services,
            "request_id": request.headers.get("X-Request-ID", "N/A")
        }
    )

    return {
        "status": overall_status,
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "services": services,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
