import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from pydantic import ValidationError

from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.core.logger.logger import get_logger
from src.core.service.auth.cache.token_store import TokenStore
from src.core.service.auth.models.token import TokenPayload, TokenType
from src.infra.config.settings import get_settings

logger = get_logger(__name__)
settings = get_settings()


class JWTService:
    """Service for verifying and revoking JWTs issued by the identity provider"""

    def __init__(self, token_store: TokenStore):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.token_store = token_store

    def create_token(
        self,
        user_id: str,
        token_type: TokenType = TokenType.ACCESS,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Encode a token the way the identity provider does.
        Used by local tooling and tests; production tokens come from the provider.
        """
        issued_at = datetime.now(timezone.utc)
        payload = TokenPayload(
            sub=user_id,
            exp=issued_at + (expires_delta or timedelta(minutes=30)),
            iat=issued_at,
            type=token_type,
            jti=str(uuid.uuid4())
        )
        claims = payload.model_dump()
        claims["type"] = token_type.value
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def _decode(self, token: str) -> TokenPayload:
        payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        return TokenPayload(**payload)

    async def verify_token(self, token: str, expected_type: TokenType = TokenType.ACCESS) -> TokenPayload:
        """
        Verify a JWT token and return its payload
        Raises ServiceError if token is invalid
        """
        try:
            token_data = self._decode(token)
        except ExpiredSignatureError:
            logger.info("Token expired", extra={"token_type": expected_type.value})
            raise ServiceError(
                code=ServiceErrorCode.TOKEN_EXPIRED,
                message="Token has expired",
                status_code=401
            )
        except (InvalidTokenError, ValidationError) as e:
            logger.warning(
                "Invalid token",
                extra={
                    "token_type": expected_type.value,
                    "error": str(e)
                }
            )
            raise ServiceError(
                code=ServiceErrorCode.INVALID_TOKEN,
                message="Invalid token",
                status_code=401
            )

        if token_data.type != expected_type:
            logger.warning(
                "Token type mismatch",
                extra={
                    "expected_type": expected_type.value,
                    "actual_type": token_data.type.value,
                    "user_id": token_data.sub
                }
            )
            raise ServiceError(
                code=ServiceErrorCode.INVALID_TOKEN,
                message="Invalid token type",
                status_code=401
            )

        if await self.token_store.is_blacklisted(token_data.jti):
            raise ServiceError(
                code=ServiceErrorCode.TOKEN_REVOKED,
                message="Token has been revoked",
                status_code=401
            )

        return token_data

    async def revoke_token(self, token: str, reason: Optional[str] = None) -> TokenPayload:
        """Verify a token, then add it to the revocation list"""
        token_data = await self.verify_token(token, TokenType.ACCESS)
        await self.token_store.add_to_blacklist(
            jti=token_data.jti,
            exp=token_data.exp,
            reason=reason
        )
        return token_data
