import redis.asyncio as redis
from functools import lru_cache
from src.infra.config.settings import settings
from src.core.logger.logger import get_logger

logger = get_logger(__name__)

@lru_cache()
def get_redis_pool() -> redis.ConnectionPool:
    """Get Redis connection pool (cached)"""
    return redis.ConnectionPool.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        max_connections=settings.REDIS_MAX_CONNECTIONS
    )

def get_redis() -> redis.Redis:
    """Get a Redis client bound to the shared pool (connects on first command)"""
    return redis.Redis(connection_pool=get_redis_pool())

async def ping_redis() -> bool:
    """Check Redis connectivity for health reporting"""
    try:
        return bool(await get_redis().ping())
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        return False
