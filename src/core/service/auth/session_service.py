from typing import Optional

from src.core.exceptions.handler import ServiceError
from src.core.logger.logger import get_logger
from src.core.service.auth.jwt_service import JWTService
from src.core.service.auth.models.session import CallerSession
from src.core.service.auth.models.token import TokenType

logger = get_logger(__name__)


class SessionResolver:
    """Resolves the caller's bearer token into a session, or None"""

    def __init__(self, jwt_service: JWTService):
        self.jwt_service = jwt_service

    async def resolve_session(self, token: Optional[str]) -> Optional[CallerSession]:
        """
        Return the caller session for a token.
        A missing, invalid, expired or revoked token resolves to None; this never raises.
        """
        if not token:
            return None

        try:
            payload = await self.jwt_service.verify_token(token, TokenType.ACCESS)
        except ServiceError as e:
            logger.debug(
                "Session not resolved",
                extra={"reason": e.code}
            )
            return None
        except Exception as e:
            logger.error(
                "Unexpected error resolving session",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__
                }
            )
            return None

        return CallerSession(user_id=payload.sub, token_id=payload.jti)
