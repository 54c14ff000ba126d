from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenPayload(BaseModel):
    """JWT token payload structure"""
    sub: str = Field(..., description="Authenticated user id")
    exp: datetime = Field(..., description="Token expiration timestamp")
    iat: datetime = Field(..., description="Token issued at timestamp")
    type: TokenType = Field(..., description="Token type (access or refresh)")
    jti: str = Field(..., description="Unique token identifier for revocation")


class TokenBlacklist(BaseModel):
    """Model for revoked tokens"""
    jti: str
    exp: datetime
    blacklisted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reason: Optional[str] = None
