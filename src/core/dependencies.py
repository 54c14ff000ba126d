"""
FastAPI dependency injection functions.
Dependency resolution using FastAPI's native DI system.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from src.infra.config.redis import get_redis
from src.infra.database import get_async_session
from src.core.service.auth.cache.token_store import TokenStore
from src.core.service.auth.jwt_service import JWTService
from src.core.service.auth.models.session import CallerSession
from src.core.service.auth.session_service import SessionResolver
from src.core.service.checkin.checkin_service import CheckinService
from src.core.service.checkin.invalidation import CacheInvalidator
from src.infra.repository.settings_repository import SettingsRepository
from src.infra.repository.user_repository import UserRepository

# Anonymous callers are valid; operations decide what no session means
bearer_scheme = HTTPBearer(auto_error=False)


async def get_redis_client() -> Redis:
    """Get Redis client dependency."""
    return get_redis()


async def get_token_store(redis_client: Redis = Depends(get_redis_client)) -> TokenStore:
    """Get token store with Redis dependency."""
    return TokenStore(redis_client)


async def get_jwt_service(token_store: TokenStore = Depends(get_token_store)) -> JWTService:
    """Get JWT service with token store dependency."""
    return JWTService(token_store)


async def get_session_resolver(jwt_service: JWTService = Depends(get_jwt_service)) -> SessionResolver:
    """Get session resolver with JWT service dependency."""
    return SessionResolver(jwt_service)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[str]:
    """Raw bearer token from the Authorization header, if any."""
    return credentials.credentials if credentials else None


async def get_caller_session(
    token: Optional[str] = Depends(get_bearer_token),
    resolver: SessionResolver = Depends(get_session_resolver)
) -> Optional[CallerSession]:
    """Resolve the caller's session; None for anonymous or invalid tokens."""
    return await resolver.resolve_session(token)


async def get_user_repository(session: AsyncSession = Depends(get_async_session)) -> UserRepository:
    """Get user repository with SQLAlchemy session dependency."""
    return UserRepository(session)


async def get_settings_repository(session: AsyncSession = Depends(get_async_session)) -> SettingsRepository:
    """Get settings repository with SQLAlchemy session dependency."""
    return SettingsRepository(session)


async def get_cache_invalidator(request: Request) -> CacheInvalidator:
    """Get cache invalidator bound to the app's WebSocket manager."""
    return CacheInvalidator(request.app.state.ws_manager)


async def get_checkin_service(
    user_repository: UserRepository = Depends(get_user_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
    invalidator: CacheInvalidator = Depends(get_cache_invalidator)
) -> CheckinService:
    """Get check-in service with repository and invalidation dependencies."""
    return CheckinService(user_repository, settings_repository, invalidator)
