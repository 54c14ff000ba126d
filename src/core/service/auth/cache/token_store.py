import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from redis.asyncio import Redis

from src.core.logger.logger import get_logger
from src.core.service.auth.models.token import TokenBlacklist
from src.infra.config.settings import get_settings

logger = get_logger(__name__)
settings = get_settings()


class TokenStore:
    """Redis-based store for revoked tokens"""

    def __init__(self, redis_client: Redis):
        self.redis = redis_client
        self.key_prefix = "blacklist:token:"
        self.margin_minutes = settings.TOKEN_BLACKLIST_EXPIRE_MARGIN_MINUTES

    def _serialize_blacklist_entry(self, entry: TokenBlacklist) -> Dict[str, Any]:
        """Convert TokenBlacklist to JSON-serializable dict"""
        return entry.model_dump(mode="json")

    async def add_to_blacklist(
        self,
        jti: str,
        exp: datetime,
        reason: Optional[str] = None
    ) -> None:
        """
        Revoke a token until it would have expired anyway (plus margin)
        """
        try:
            now = datetime.now(timezone.utc)
            ttl_seconds = int((exp - now + timedelta(minutes=self.margin_minutes)).total_seconds())

            if ttl_seconds <= 0:
                logger.info(
                    "Skipping blacklist for expired token",
                    extra={"jti": jti}
                )
                return

            entry = TokenBlacklist(jti=jti, exp=exp, reason=reason)
            await self.redis.setex(
                f"{self.key_prefix}{jti}",
                ttl_seconds,
                json.dumps(self._serialize_blacklist_entry(entry))
            )

            logger.info(
                "Token blacklisted",
                extra={
                    "jti": jti,
                    "expires_in": ttl_seconds,
                    "reason": reason
                }
            )

        except Exception as e:
            logger.error(
                "Failed to blacklist token",
                extra={
                    "jti": jti,
                    "error": str(e)
                }
            )
            raise

    async def is_blacklisted(self, jti: str) -> bool:
        """Check if a token is revoked"""
        try:
            exists = await self.redis.exists(f"{self.key_prefix}{jti}")

            if exists:
                logger.info(
                    "Revoked token access attempt",
                    extra={"jti": jti}
                )

            return bool(exists)

        except Exception as e:
            # Fail open when Redis is unreachable
            logger.warning(
                "Failed to check token blacklist, allowing token",
                extra={
                    "jti": jti,
                    "error": str(e),
                    "error_type": type(e).__name__
                }
            )
            return False
