"""Session router"""

from typing import Optional
from fastapi import APIRouter, Depends

from src.core.dependencies import get_bearer_token, get_jwt_service
from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.core.logger.logger import get_logger
from src.core.service.auth.jwt_service import JWTService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/logout")
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    jwt_service: JWTService = Depends(get_jwt_service)
):
    """Revoke the presented access token so it no longer resolves to a session."""
    if not token:
        raise ServiceError(
            code=ServiceErrorCode.NOT_AUTHENTICATED,
            message="Not authenticated",
            status_code=401
        )

    payload = await jwt_service.revoke_token(token, reason="User logout")

    logger.info("User logged out", extra={"user_id": payload.sub})
    return {"success": True, "message": "Successfully logged out"}
